import sentry_sdk
from fastapi import FastAPI
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from invitation import __version__
from invitation.config.logging import setup_logging
from invitation.config.settings import settings
from invitation.proxy.router import router as rsvp_proxy_router
from invitation.routers.healthz.router import router as healthz_router

setup_logging()

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding Invitation RSVP Proxy",
    description="Same-origin relay that forwards invitation RSVPs to the backend",
    version=__version__,
)

# The RSVP proxy sets its own permissive CORS headers, see invitation.proxy.router.
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(rsvp_proxy_router, tags=["RSVP"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding Invitation RSVP API"}
