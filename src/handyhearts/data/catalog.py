"""
Service Catalog - loads bookable services and their billing terms.

Rows are read with pandas and converted into ServiceRate values here, so the
pricing engine never receives an untyped record.
"""
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.models import InvalidServiceRecord, ServiceRate

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('id', 'name', 'base_rate_cents', 'min_hours')
TRUE_VALUES = {'true', '1', 'yes', 'y'}


class CatalogError(ValueError):
    """Raised when the catalog file is malformed."""


class UnknownServiceError(CatalogError):
    """Raised when a service id is not in the active catalog."""

    def __init__(self, service_id: str):
        super().__init__(f"Unknown service '{service_id}'")
        self.service_id = service_id


class ServiceCatalog:
    """
    In-memory view of the service catalog CSV.

    Expected columns: id, name, description, base_rate_cents, min_hours,
    is_active (optional, defaults to active).
    """

    def __init__(self, catalog_path: Optional[Path] = None, settings: Optional[Settings] = None):
        if catalog_path is None:
            settings = settings or get_settings()
            catalog_path = settings.service_catalog
        self.catalog_path = Path(catalog_path)
        self._services: dict[str, ServiceRate] = {}
        self._active: dict[str, bool] = {}
        self._load()

    def _load(self):
        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Service catalog not found at {self.catalog_path}.")

        df = pd.read_csv(self.catalog_path, dtype=str, keep_default_na=False)
        df.columns = [str(c).strip() for c in df.columns]

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogError(
                f"Service catalog {self.catalog_path} is missing columns: {', '.join(missing)}"
            )
        if 'is_active' not in df.columns:
            df['is_active'] = 'true'

        services: dict[str, ServiceRate] = {}
        active: dict[str, bool] = {}
        for row in df.to_dict(orient='records'):
            try:
                service = ServiceRate.from_record(row)
            except InvalidServiceRecord as e:
                raise CatalogError(str(e)) from e
            if not service.service_id:
                raise CatalogError(f"Service '{service.name}' has no id")
            if service.service_id in services:
                raise CatalogError(f"Duplicate service id '{service.service_id}'")

            services[service.service_id] = service
            active[service.service_id] = str(row['is_active']).strip().lower() in TRUE_VALUES

        self._services = services
        self._active = active
        logger.info(
            "Loaded %d services (%d active) from %s",
            len(services), sum(active.values()), self.catalog_path,
        )

    def reload(self):
        """Re-read the catalog file from disk."""
        self._load()

    def __len__(self) -> int:
        return len(self._services)

    def list_services(self, active_only: bool = True) -> list[ServiceRate]:
        """Services in file order."""
        return [
            service for service_id, service in self._services.items()
            if self._active[service_id] or not active_only
        ]

    def is_active(self, service_id: str) -> bool:
        return self._active.get(str(service_id).strip(), False)

    def get(self, service_id: str) -> ServiceRate:
        """Look up an active service by id."""
        service_id = str(service_id).strip()
        if not self.is_active(service_id):
            raise UnknownServiceError(service_id)
        return self._services[service_id]

    def find_by_category(self, category: str) -> ServiceRate:
        """
        Resolve a request-wizard category slug to a service.

        'wifi_setup' matches a service whose name contains 'wifi setup'.
        Falls back to the first active service.
        """
        services = self.list_services()
        if not services:
            raise CatalogError("Service catalog has no active services")

        needle = (category or '').replace('_', ' ').strip().lower()
        if needle:
            for service in services:
                if needle in service.name.lower():
                    return service
        return services[0]
