"""
API routes for browsing the timeline.

Endpoints
---------
- `GET /facets`: facet universes and dataset year bounds.
- `GET /timeline`, `POST /timeline`: filtered entries grouped by decade.
- `GET /entries/{entry_id}`: one entry with its related entries.
- `POST /toggle`: apply an isolate/reset click to a facet selection.
- `GET /export`: the filtered entries as a downloadable JSON file.

`GET` variants take repeated ``type`` / ``family`` query parameters; use
`POST /timeline` to express an explicitly empty facet selection.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ostimeline.api.schemas import (
    FacetsResponse,
    TimelineQuery,
    ToggleRequest,
    ToggleResponse,
)
from ostimeline.core.contracts.entry import ENTRY_TYPES, FAMILIES, PLATFORMS, EntryType, Family
from ostimeline.core.contracts.view import EntryDetail, TimelineView
from ostimeline.core.dataset import Dataset, default_dataset
from ostimeline.core.errors import EntryNotFoundError
from ostimeline.core.export import EXPORT_MEDIA_TYPE, export_snapshot
from ostimeline.core.filtering import filter_entries
from ostimeline.core.selection import ordered, toggle
from ostimeline.core.session import build_view, entry_detail

router = APIRouter(tags=["Timeline"])


def get_dataset() -> Dataset:
    """Dependency hook; tests override it with a small fixture dataset."""
    return default_dataset()


DatasetDep = Annotated[Dataset, Depends(get_dataset)]


def query_params(
    q: Annotated[str, Query(description="Free-text search")] = "",
    type_: Annotated[list[EntryType] | None, Query(alias="type")] = None,
    family: Annotated[list[Family] | None, Query()] = None,
    range_from: Annotated[int | None, Query(alias="from")] = None,
    range_to: Annotated[int | None, Query(alias="to")] = None,
) -> TimelineQuery:
    """Collect `GET` query parameters into a :class:`TimelineQuery`."""
    return TimelineQuery(
        query=q,
        types=type_,
        families=family,
        range_from=range_from,
        range_to=range_to,
    )


QueryDep = Annotated[TimelineQuery, Depends(query_params)]


@router.get("/facets", response_model=FacetsResponse, summary="List filter options")
async def get_facets(dataset: DatasetDep) -> FacetsResponse:
    return FacetsResponse(
        types=list(ENTRY_TYPES),
        families=list(FAMILIES),
        platforms=[p.value for p in PLATFORMS],
        min_year=dataset.min_year,
        max_year=dataset.max_year,
    )


@router.get(
    "/timeline",
    response_model=TimelineView,
    response_model_exclude_none=True,
    summary="Filtered entries grouped by decade",
)
async def get_timeline(dataset: DatasetDep, params: QueryDep) -> TimelineView:
    return build_view(dataset, params.to_state(dataset))


@router.post(
    "/timeline",
    response_model=TimelineView,
    response_model_exclude_none=True,
    summary="Filtered entries grouped by decade (explicit snapshot)",
)
async def post_timeline(dataset: DatasetDep, params: TimelineQuery) -> TimelineView:
    return build_view(dataset, params.to_state(dataset))


@router.get(
    "/entries/{entry_id}",
    response_model=EntryDetail,
    response_model_exclude_none=True,
    summary="Entry details with related entries",
)
async def get_entry(dataset: DatasetDep, entry_id: str) -> EntryDetail:
    try:
        return entry_detail(dataset, entry_id)
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/toggle", response_model=ToggleResponse, summary="Click a facet chip")
async def post_toggle(request: ToggleRequest) -> ToggleResponse:
    """Apply the isolate/reset rule; unknown option values yield HTTP 400."""
    if request.facet == "type":
        types = toggle(
            [EntryType(v) for v in request.selected], ENTRY_TYPES, EntryType(request.clicked)
        )
        return ToggleResponse(selected=[t.value for t in ordered(types, ENTRY_TYPES)])

    families = toggle(
        [Family(v) for v in request.selected], FAMILIES, Family(request.clicked)
    )
    return ToggleResponse(selected=[f.value for f in ordered(families, FAMILIES)])


@router.get("/export", summary="Download the filtered entries as JSON")
async def get_export(dataset: DatasetDep, params: QueryDep) -> Response:
    state = params.to_state(dataset)
    data, filename = export_snapshot(
        filter_entries(dataset, state), state.range_from, state.range_to
    )
    return Response(
        content=data,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


__all__ = ["router", "get_dataset"]
