"""REST API - FastAPI app and routes for the rotor"""
