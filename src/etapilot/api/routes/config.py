"""Config validation and migration endpoints."""

from typing import Any

from fastapi import APIRouter, Body

from ...config import migrate_to_v2, parse_config, validate_config
from ...models import CONFIG_VERSION_V2
from ..schemas.requests import MigrateRequest
from ..schemas.responses import MigrateResponse, ValidationResponse

router = APIRouter(prefix="/config", tags=["Config"])


@router.post("/validate", response_model=ValidationResponse)
async def validate(config: dict[str, Any] = Body(...)):
    """
    Structurally validate a rule config.

    Always answers 200; problems are reported in `error` as
    "path: message" pairs (first three, then a count).
    """
    result = validate_config(config)
    if not result.success:
        return ValidationResponse(valid=False, error=result.error.message)

    parsed = result.config
    if parsed.is_v2:
        return ValidationResponse(
            valid=True,
            version=parsed.version,
            profile_count=len(parsed.profiles),
            rule_count=sum(len(p.rules) for p in parsed.profiles),
        )
    return ValidationResponse(
        valid=True,
        version=parsed.version,
        rule_count=len(parsed.rules),
    )


@router.post("/migrate", response_model=MigrateResponse)
async def migrate(request: MigrateRequest):
    """
    Migrate a config to version 2.

    A version 2 config comes back unchanged. A version 1 config gets a
    "Default" profile with a new ID unless `profile_id` is given.
    """
    config = parse_config(request.config)
    migrated = migrate_to_v2(config, request.profile_id)
    return MigrateResponse(
        migrated=config.version != CONFIG_VERSION_V2,
        config=migrated.to_dict(),
    )
