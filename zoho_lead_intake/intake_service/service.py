import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..shared.config import AppConfig, load_config, load_service_config
from ..shared.exceptions import ConfigurationError
from ..shared.utils import setup_logging

from .handler import HandlerResult, LeadIntakeHandler
from .zoho_client import CRMGateway, ZohoClient

WEBHOOK_PATH = "/api/webhook"
WEBHOOK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]

class IntakeService:
    """Service receiving website form submissions and forwarding them to Zoho CRM"""

    def __init__(self, config_path: Optional[str] = None, app_config: Optional[AppConfig] = None,
                 gateway: Optional[CRMGateway] = None):
        """
        Initialize the Intake Service

        Args:
            config_path (str, optional): Path to config file. Defaults to None.
            app_config (AppConfig, optional): Preloaded configuration. Defaults to None.
            gateway (CRMGateway, optional): CRM gateway to use instead of ZohoClient. Defaults to None.
        """
        # Load configuration once; a missing Zoho credential is reported per request
        config_error = None
        if app_config is None:
            try:
                app_config = load_config(config_path)
            except ConfigurationError as e:
                config_error = e

        self.config = app_config
        service_config = app_config.service if app_config else load_service_config(config_path)

        # Set up logging
        self.logger = setup_logging(service_config.name,
                                    log_level=getattr(logging, service_config.log_level),
                                    log_dir=service_config.log_dir)

        if config_error:
            self.logger.error(f"Missing Zoho environment variables: {config_error}")

        # Initialize CRM gateway
        if gateway is None and app_config is not None:
            gateway = ZohoClient(app_config.zoho, logger=self.logger)
        self.gateway = gateway

        self.handler = LeadIntakeHandler(
            gateway=self.gateway,
            cors_origin=service_config.cors_origin,
            debug=service_config.debug,
            logger=self.logger
        )

        # Create FastAPI app
        self.app = FastAPI(
            title="Zoho Lead Intake Service",
            description="Forwards website form submissions to Zoho CRM as leads",
            version="1.0.0",
            debug=service_config.debug
        )

        # Register routes
        self._register_routes()

        # Register startup and shutdown events
        self.app.on_event("startup")(self.startup_event)
        self.app.on_event("shutdown")(self.shutdown_event)

    def _register_routes(self):
        """Register API routes"""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint"""
            return {"status": "healthy", "service": "intake_service"}

        @self.app.api_route(WEBHOOK_PATH, methods=WEBHOOK_METHODS)
        async def webhook(request: Request):
            """
            Receive a form submission and create a Zoho CRM lead

            Args:
                request (Request): Incoming request with a JSON body

            Returns:
                Response: JSON response, or an empty body for preflight requests
            """
            payload = None
            if request.method == "POST":
                try:
                    payload = await request.json()
                except ValueError:
                    self.logger.warning("Request body is not valid JSON")

            result = await run_in_threadpool(self.handler.handle, request.method, payload)
            return self._to_response(result)

        @self.app.exception_handler(StarletteHTTPException)
        async def webhook_method_not_allowed(request: Request, exc: StarletteHTTPException):
            """Answer methods the router does not list with the webhook's own 405"""
            if exc.status_code == 405 and request.url.path == WEBHOOK_PATH:
                return self._to_response(self.handler.handle(request.method, None))
            return await http_exception_handler(request, exc)

    @staticmethod
    def _to_response(result: HandlerResult) -> Response:
        if result.body is None:
            return Response(status_code=result.status_code, headers=result.headers)
        return JSONResponse(content=result.body, status_code=result.status_code, headers=result.headers)

    async def startup_event(self):
        """Startup event handler"""
        self.logger.info("Starting Intake Service")

    async def shutdown_event(self):
        """Shutdown event handler"""
        self.logger.info("Shutting down Intake Service")

def create_app(config_path: Optional[str] = None) -> FastAPI:
    """
    Create FastAPI application

    Args:
        config_path (str, optional): Path to config file. Defaults to None.

    Returns:
        FastAPI: FastAPI application
    """
    service = IntakeService(config_path)
    return service.app

if __name__ == "__main__":
    import uvicorn

    # Load configuration
    service_config = load_service_config()

    # Run the application
    uvicorn.run(
        "zoho_lead_intake.intake_service.service:create_app",
        factory=True,
        host=service_config.host,
        port=service_config.port,
        reload=service_config.debug
    )
