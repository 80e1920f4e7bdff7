"""HTTP and websocket server for live subtitle sessions.

WHY: Recognizers and audience displays usually run in browsers or on
other machines; the server is their shared meeting point.

HOW: app.py defines the FastAPI application; models.py defines its
pydantic schemas. run_api() serves it with uvicorn.
"""
