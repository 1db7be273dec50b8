# models/base_models.py
from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _ensure_utc(value: datetime) -> datetime:
    # Date-only strings ("2025-06-30") arrive naive; treat them as UTC midnight
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_ensure_utc)]


class Record(BaseModel):
    """
    Read-only snapshot exchanged with the UI/data providers.
    Accepts camelCase keys (as stored in the JSON mocks) or snake_case names.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
