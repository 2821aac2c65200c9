"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from attendly.adapters.document_audit_repository import DocumentAuditRepository
from attendly.adapters.document_class_repository import DocumentClassRepository
from attendly.adapters.document_profile_repository import DocumentProfileRepository
from attendly.adapters.supabase_backend import ClientFactory, create_backend
from attendly.config import Settings
from attendly.services.audit import AuditService
from attendly.services.backend import DocumentBackend
from attendly.services.classes import ClassService
from attendly.services.invitations import InvitationResolver
from attendly.services.profiles import ProfileService
from attendly.services.roster import RosterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    backend: DocumentBackend
    profile_service: ProfileService
    class_service: ClassService
    invitation_resolver: InvitationResolver
    roster_service: RosterService


def build_services(settings: Settings, backend: DocumentBackend) -> AppContainer:
    """Wire repositories and services on top of an already chosen backend."""
    class_repository = DocumentClassRepository(backend)
    profile_service = ProfileService(
        DocumentProfileRepository(backend),
        batch_size=settings.profile_batch_size,
        image_max_bytes=settings.profile_image_max_bytes,
    )
    audit_service = AuditService(DocumentAuditRepository(backend))
    invitation_resolver = InvitationResolver(class_repository)
    class_service = ClassService(
        repository=class_repository,
        profiles=profile_service,
        audit=audit_service,
        code_attempts=settings.class_code_attempts,
    )
    roster_service = RosterService(
        repository=class_repository,
        resolver=invitation_resolver,
        audit=audit_service,
    )
    return AppContainer(
        settings=settings,
        backend=backend,
        profile_service=profile_service,
        class_service=class_service,
        invitation_resolver=invitation_resolver,
        roster_service=roster_service,
    )


def build_container(
    settings: Settings | None = None, client_factory: ClientFactory = create_client
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    backend = create_backend(resolved_settings, client_factory)
    return build_services(resolved_settings, backend)
