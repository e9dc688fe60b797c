"""
Serverless entry point

Mangum translates API Gateway / Function URL events into ASGI calls, so each
invocation is served by the FastAPI app unchanged.
"""

from mangum import Mangum

from school_auth.main import app

handler = Mangum(app, lifespan="off")
