from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from claimgrid.errors import InvalidCoordinate, InvalidPayload
from claimgrid.services.grid import NOT_A_NUMBER, NOT_AN_INTEGER


class ClaimRequest(BaseModel):
    """Inbound `claim-cell` payload. Bounds are checked by the engine."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    row: int
    col: int

    @field_validator('row', 'col', mode='before')
    @classmethod
    def _whole_number(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(NOT_A_NUMBER)
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(NOT_AN_INTEGER)
            return int(value)
        return value


def parse_claim(payload) -> ClaimRequest:
    if not isinstance(payload, Mapping):
        raise InvalidPayload()
    try:
        return ClaimRequest.model_validate(dict(payload))
    except ValidationError as exc:
        error = exc.errors()[0]
        cause = (error.get('ctx') or {}).get('error')
        if error.get('type') == 'value_error' and cause is not None:
            raise InvalidCoordinate(str(cause)) from None
        raise InvalidCoordinate(NOT_A_NUMBER) from None
