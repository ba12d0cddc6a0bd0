"""Holiday calendar endpoints."""

from fastapi import APIRouter, HTTPException, Path

from ...calendars import format_iso, get_definition, get_holiday_names, list_countries
from ..schemas.responses import CountrySummary, HolidayEntry, HolidaysResponse

router = APIRouter(prefix="/holidays", tags=["Holidays"])


@router.get("", response_model=list[CountrySummary])
async def list_holiday_countries():
    """List countries with a national holiday calendar, sorted by name."""
    return [CountrySummary(code=code, name=name) for code, name in list_countries()]


@router.get("/{country}/{year}", response_model=HolidaysResponse)
async def get_holidays(
    country: str,
    year: int = Path(..., ge=1900, le=2200),
):
    """Get a country's national holidays for a year, sorted by date."""
    definition = get_definition(country)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Country '{country}' not supported")

    return HolidaysResponse(
        country=definition.code,
        name=definition.name,
        year=year,
        holidays=[
            HolidayEntry(date=format_iso(d), name=name)
            for d, name in get_holiday_names(definition.code, year)
        ],
    )
