"""Onboarding domain API package."""

from onboarding.api.routes import account_router, application_router

__all__ = ["account_router", "application_router"]
