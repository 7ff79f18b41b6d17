"""Read-only listing of the district table used by district filters."""

from fastapi import APIRouter, Depends

from event_alerts.application.use_cases.notifications import DistrictResolver
from event_alerts.interfaces.api.dependencies import get_resolver
from event_alerts.interfaces.api.schemas import DistrictRead

router = APIRouter(prefix="/districts", tags=["districts"])


@router.get("/", response_model=list[DistrictRead])
def list_districts(
    resolver: DistrictResolver = Depends(get_resolver),
) -> list[DistrictRead]:
    return [
        DistrictRead(name=name, localities=list(localities))
        for name, localities in resolver.table.items()
    ]
