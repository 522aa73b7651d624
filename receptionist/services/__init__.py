"""
Service layer: the FastAPI app serving Twilio voice webhooks.
"""
