#run it with uvicorn comingsoon.main:app --reload
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from comingsoon.api.v1.api_router import api_router
from dotenv import load_dotenv
from comingsoon.core.config import Settings, get_settings
import logging

# Load environment variables from .env file
load_dotenv()

settings = get_settings()

# Set up logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Coming Soon Landing Backend", version="1.0.0")

# CORS setup (set ALLOWED_ORIGINS to the landing page domain in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


app.include_router(api_router)


@app.get("/api/health")
def health_check(current: Settings = Depends(get_settings)):
    """
    Health check endpoint.

    Reports which SMTP relay settings are present so an operator can spot a
    misconfigured deployment. Only booleans are returned, never values.
    """
    return {
        "status": "ok",
        "smtp": current.smtp_status,
        "recipient_configured": bool(current.contact_recipient_email),
    }


#run it with uvicorn comingsoon.main:app --reload
