"""Contract blueprint endpoint."""

from fastapi import APIRouter

from auction_validator.api.deps import SettingsDep
from auction_validator.schemas.blueprint import build_blueprint

router = APIRouter()


@router.get("")
async def get_blueprint(settings: SettingsDep):
    """Get the validator blueprint (datum, redeemer and parameter schemas)."""
    return build_blueprint(settings)
