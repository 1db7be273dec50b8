# pecem_ai/services/certification_catalog.py
import json
from typing import Any, Dict, Iterable, Optional

from loguru import logger
from pydantic import ValidationError

from pecem_ai import config
from pecem_ai.models.candidate_models import Certification


class CertificationCatalog:
    """Read-only lookup of certification metadata by id."""

    def __init__(self, certifications: Iterable[Certification] = ()):
        self._by_id: Dict[str, Certification] = {c.id: c for c in certifications}

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "CertificationCatalog":
        return cls(Certification.model_validate(r) for r in records)

    @classmethod
    def from_json(cls, path: str) -> "CertificationCatalog":
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
            catalog = cls.from_records(records)
        except (OSError, ValueError, ValidationError) as e:
            # Missing names are skipped downstream, so an empty catalog is usable
            logger.warning(f"⚠️ Could not load certification catalog from {path}: {e}")
            return cls()
        logger.info(f"✅ Certification catalog loaded ({len(catalog)} entries)")
        return catalog

    def get(self, cert_id: str) -> Optional[Certification]:
        return self._by_id.get(cert_id)

    def name_for(self, cert_id: str) -> Optional[str]:
        cert = self.get(cert_id)
        return cert.name if cert else None

    def __contains__(self, cert_id: object) -> bool:
        return cert_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)


# Lazy load default catalog
_default_catalog: Optional[CertificationCatalog] = None


def get_default_catalog() -> CertificationCatalog:
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = CertificationCatalog.from_json(config.CERTIFICATION_CATALOG_PATH)
    return _default_catalog
