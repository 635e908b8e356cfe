# app/__init__.py
"""
Products REST API.

Run with:
    uvicorn app.main:app --reload
"""
