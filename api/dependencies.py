"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from one Settings
instance.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService
    from modules.profiles.interfaces import IProfileService
    from modules.roles.interfaces import IRoleResolver
    from modules.webhooks.interfaces import IWebhookService
    from modules.webhooks.verification import WebhookVerifier


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._db: "Client | None" = None
        self._role_resolver: "IRoleResolver | None" = None
        self._profile_service: "IProfileService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._webhook_verifier: "WebhookVerifier | None" = None
        self._webhook_service: "IWebhookService | None" = None

    @property
    def settings(self) -> Settings:
        """Get the settings every service is built from."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Get the service-role Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client(self.settings)
        return self._db

    @property
    def roles(self) -> "IRoleResolver":
        """Get the role resolver instance."""
        if self._role_resolver is None:
            from modules.roles.repository import RoleRepository
            from modules.roles.service import RoleResolver
            self._role_resolver = RoleResolver.from_settings(RoleRepository(self.db), self.settings)
        return self._role_resolver

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.repository import ProfileRepository
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(
                repository=ProfileRepository(self.db),
                roles=self.roles,
            )
        return self._profile_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                settings=self.settings,
                profiles=self.profiles,
                roles=self.roles,
            )
        return self._auth_service

    @property
    def webhook_verifier(self) -> "WebhookVerifier":
        """Get the webhook signature verifier."""
        if self._webhook_verifier is None:
            from modules.webhooks.verification import WebhookVerifier
            self._webhook_verifier = WebhookVerifier.from_settings(self.settings)
        return self._webhook_verifier

    @property
    def webhooks(self) -> "IWebhookService":
        """Get the webhook service instance."""
        if self._webhook_service is None:
            from modules.webhooks.service import WebhookService
            self._webhook_service = WebhookService(
                verifier=lambda: self.webhook_verifier,
                profiles=lambda: self.profiles,
            )
        return self._webhook_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._role_resolver = None
        self._profile_service = None
        self._auth_service = None
        self._webhook_verifier = None
        self._webhook_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_role_resolver() -> "IRoleResolver":
    """FastAPI dependency for role resolver."""
    return get_container().roles


def get_webhook_service() -> "IWebhookService":
    """FastAPI dependency for webhook service."""
    return get_container().webhooks
