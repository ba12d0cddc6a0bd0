"""
ETAPilot HTTP service.

Run with:
    uvicorn etapilot.api.main:app
"""
