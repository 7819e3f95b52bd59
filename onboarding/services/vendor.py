"""Vendor service: listing, grouping and creation of vendor applications.

Photo uploads are best-effort: any upload failure is turned into an
``UploadWarning`` and the vendor is still created without that photo.
Photos are uploaded before the insert; if the insert fails they are removed again.

Rule: No SQLAlchemy queries / no FastAPI here. Repositories do the DB work.
"""


import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.exceptions import StorageError, StorageErrorKind
from onboarding.domain.vendor import Vendor, VendorStatus
from onboarding.repositories.vendor import VendorRepository
from onboarding.services.identity import Principal
from onboarding.services.storage import (
    BUSINESS_PHOTOS_BUCKET,
    VERIFIED_PHOTOS_BUCKET,
    LocalObjectStorage,
    object_path,
)
from onboarding.services.validation import PhotoUpload, VendorDraft

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"

# form field -> (bucket, vendor column)
PHOTO_TARGETS: dict[str, tuple[str, str]] = {
    "verifiedPhoto": (VERIFIED_PHOTOS_BUCKET, "verified_photo_url"),
    "businessPhoto": (BUSINESS_PHOTOS_BUCKET, "business_photo_url"),
}

_CREATE_MESSAGES: dict[StorageErrorKind, str] = {
    StorageErrorKind.CONFLICT: "A vendor with this phone number already exists",
    StorageErrorKind.INVALID_REFERENCE: "Invalid data provided. Please check your inputs",
    StorageErrorKind.POLICY_DENIED: "Authentication error. Please sign in again",
}

_UPLOAD_REASONS: dict[StorageErrorKind, str] = {
    StorageErrorKind.PAYLOAD_TOO_LARGE: "File size is too large (max 5MB)",
    StorageErrorKind.POLICY_DENIED: "File upload not allowed",
}


@dataclass
class UploadWarning:
    field: str
    kind: StorageErrorKind
    message: str


@dataclass
class VendorCreateResult:
    vendor: Vendor
    warnings: list[UploadWarning] = field(default_factory=list)


@dataclass
class SalespersonGroup:
    salesperson_email: str
    vendors: list[Vendor]

    def _count(self, status: VendorStatus) -> int:
        return sum(1 for v in self.vendors if v.status == status.value)

    @property
    def pending_count(self) -> int:
        return self._count(VendorStatus.PENDING)

    @property
    def approved_count(self) -> int:
        return self._count(VendorStatus.APPROVED)

    @property
    def rejected_count(self) -> int:
        return self._count(VendorStatus.REJECTED)


def filter_by_salesperson(vendors: list[Vendor], salesperson_email: str | None) -> list[Vendor]:
    if not salesperson_email or salesperson_email == "all":
        return vendors
    return [v for v in vendors if v.salesperson_email == salesperson_email]


def group_by_salesperson(vendors: list[Vendor]) -> list[SalespersonGroup]:
    """Group vendors by submitter email, keeping first-seen order."""
    groups: dict[str, list[Vendor]] = {}
    for vendor in vendors:
        groups.setdefault(vendor.salesperson_email or UNASSIGNED, []).append(vendor)
    return [SalespersonGroup(email, items) for email, items in groups.items()]


def salesperson_emails(vendors: list[Vendor]) -> list[str]:
    return list(dict.fromkeys(v.salesperson_email for v in vendors if v.salesperson_email))


def upload_warning(photo: PhotoUpload, exc: StorageError) -> UploadWarning:
    if exc.kind is StorageErrorKind.NOT_CONFIGURED:
        message = (
            "File storage not configured yet - photo uploads will be available after setup. "
            "Vendor will be created without photo."
        )
    else:
        reason = _UPLOAD_REASONS.get(exc.kind, f"Failed to upload file: {exc.raw}")
        message = f"{photo.label} upload failed: {reason}. Vendor will be created without photo."
    return UploadWarning(field=photo.field, kind=exc.kind, message=message)


class VendorService:
    def __init__(self, session: AsyncSession, storage: LocalObjectStorage | None = None):
        self._repo = VendorRepository(session)
        self._storage = storage

    # ------------------------------------------------------------------
    # Salesperson views
    # ------------------------------------------------------------------

    async def list_for_salesperson(
        self, salesperson_id: str, status: VendorStatus | None = None
    ) -> list[Vendor]:
        if status is None:
            return await self._repo.list_by_salesperson(salesperson_id)
        return await self._repo.list_by_salesperson_and_status(salesperson_id, status)

    # ------------------------------------------------------------------
    # Admin views
    # ------------------------------------------------------------------

    async def list_pending(self, salesperson_email: str | None = None) -> list[Vendor]:
        return filter_by_salesperson(await self._repo.list_pending(), salesperson_email)

    async def list_all(self, salesperson_email: str | None = None) -> list[Vendor]:
        return filter_by_salesperson(await self._repo.list_all(), salesperson_email)

    async def grouped(
        self, pending_only: bool, salesperson_email: str | None = None
    ) -> tuple[list[SalespersonGroup], list[str]]:
        """Return the groups to display and every submitter email available for filtering."""
        everything = await self._repo.list_all()
        base = [v for v in everything if v.status == VendorStatus.PENDING.value] if pending_only else everything
        groups = group_by_salesperson(filter_by_salesperson(base, salesperson_email))
        return groups, salesperson_emails(everything)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def _attach_photos(
        self, owner: Principal, photos: list[PhotoUpload]
    ) -> tuple[dict[str, tuple[str, str]], list[UploadWarning]]:
        # vendor column -> (bucket, stored path)
        paths: dict[str, tuple[str, str]] = {}
        warnings: list[UploadWarning] = []
        for photo in photos:
            bucket, column = PHOTO_TARGETS[photo.field]
            if self._storage is None:
                exc = StorageError(StorageErrorKind.NOT_CONFIGURED, "Object storage is not configured")
                warnings.append(upload_warning(photo, exc))
                continue
            try:
                stored = await self._storage.upload(
                    bucket, object_path(owner.id, photo.filename), photo.data
                )
                paths[column] = (bucket, stored)
            except StorageError as exc:
                logger.warning("Upload to %s failed (%s): %s", bucket, exc.kind.value, exc.raw)
                warnings.append(upload_warning(photo, exc))
        return paths, warnings

    async def _discard_photos(self, paths: dict[str, tuple[str, str]]) -> None:
        if self._storage is None:
            return
        for bucket, path in paths.values():
            try:
                await self._storage.remove(bucket, path)
            except StorageError as exc:
                logger.warning(
                    "Could not remove orphaned %s/%s (%s): %s", bucket, path, exc.kind.value, exc.raw
                )

    async def create_vendor(
        self, owner: Principal, draft: VendorDraft, photos: list[PhotoUpload] | None = None
    ) -> VendorCreateResult:
        paths, warnings = await self._attach_photos(owner, photos or [])
        urls = {column: path for column, (_, path) in paths.items()}

        try:
            vendor = await self._repo.create(
                name=draft.name,
                category_id=draft.category_id or None,
                phone_number=draft.phone_number,
                address=draft.address,
                listing_count=draft.listing_count,
                total_price=draft.total_price,
                salesperson_id=owner.id,
                salesperson_email=owner.email,
                verified_photo_url=urls.get("verified_photo_url"),
                business_photo_url=urls.get("business_photo_url"),
            )
        except StorageError as exc:
            logger.warning("Vendor creation failed (%s): %s", exc.kind.value, exc.raw)
            await self._discard_photos(paths)
            message = _CREATE_MESSAGES.get(exc.kind, f"Failed to save vendor: {exc.raw}")
            raise StorageError(exc.kind, message, raw=exc.raw) from exc

        logger.info("Vendor %s created by %s with %d warning(s)", vendor.id, owner.id, len(warnings))
        return VendorCreateResult(vendor=vendor, warnings=warnings)
