"""Artist catalog API endpoints.

Hey future me - CRUD over the key-value backed catalog, plus the two endpoints that talk
to the outside world: /play (Home Assistant) and /bulk (YouTube). List and search drop
records that can't be parsed instead of failing the whole call; how many were dropped
goes into the X-Skipped-Records response header.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from hamusic.api.dependencies import (
    get_artist_repository,
    get_bulk_import_use_case,
    get_playback_dispatcher,
)
from hamusic.api.schemas import (
    ArtistCreateRequest,
    ArtistResponse,
    ArtistUpdateRequest,
    BulkImportItem,
    BulkImportResponse,
    DeleteResponse,
    PlayResponse,
)
from hamusic.api.schemas.artists import video_to_entity
from hamusic.application.services.playback_dispatcher import PlaybackDispatcher
from hamusic.application.use_cases.bulk_import import (
    BulkImportArtistsUseCase,
    BulkImportEntry,
    BulkImportRequest,
)
from hamusic.domain.entities import ArtistDraft
from hamusic.domain.ports import ArtistListing
from hamusic.infrastructure.persistence.repositories import ArtistRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/artists")

SKIPPED_HEADER = "X-Skipped-Records"


def _listing_response(listing: ArtistListing, response: Response) -> list[ArtistResponse]:
    response.headers[SKIPPED_HEADER] = str(listing.skipped)
    return [ArtistResponse.from_entity(a) for a in listing.artists]


@router.get("", response_model=list[ArtistResponse])
async def list_artists(
    response: Response,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> list[ArtistResponse]:
    """List all artists sorted by name."""
    listing = await repository.list_all()
    return _listing_response(listing, response)


@router.get("/search", response_model=list[ArtistResponse])
async def search_artists(
    response: Response,
    q: str = Query(default="", description="Case-insensitive substring of the name"),
    repository: ArtistRepository = Depends(get_artist_repository),
) -> list[ArtistResponse]:
    """Search artists by name. Results keep index order, they are not sorted."""
    listing = await repository.search(q)
    return _listing_response(listing, response)


@router.post("", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
async def create_artist(
    body: ArtistCreateRequest,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> ArtistResponse:
    """Create an artist. The id is allocated by the server."""
    artist = await repository.add(
        ArtistDraft(
            name=body.name,
            avatar=body.avatar,
            video=video_to_entity(body.video),
        )
    )
    return ArtistResponse.from_entity(artist)


@router.post("/bulk", response_model=BulkImportResponse)
async def bulk_import_artists(
    items: list[BulkImportItem],
    use_case: BulkImportArtistsUseCase = Depends(get_bulk_import_use_case),
) -> BulkImportResponse:
    """Import artists from name/URL pairs. Entries that don't resolve are skipped."""
    result = await use_case.execute(
        BulkImportRequest(
            entries=[BulkImportEntry(name=item.name, url=item.url) for item in items]
        )
    )
    return BulkImportResponse(
        added=[ArtistResponse.from_entity(a) for a in result.added],
        skipped=result.skipped,
    )


@router.put("/{artist_id}", response_model=ArtistResponse)
async def update_artist(
    artist_id: int,
    body: ArtistUpdateRequest,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> ArtistResponse:
    """Merge the given fields into an existing artist."""
    artist = await repository.edit(artist_id, body.to_patch())
    return ArtistResponse.from_entity(artist)


@router.delete("/{artist_id}", response_model=DeleteResponse)
async def delete_artist(
    artist_id: int,
    repository: ArtistRepository = Depends(get_artist_repository),
) -> DeleteResponse:
    """Delete an artist."""
    await repository.remove(artist_id)
    return DeleteResponse(success=True)


# Hey future me - 502 here means "Home Assistant answered but refused". The body still has
# both status codes so the UI can tell a power-on failure from a play failure.
@router.post(
    "/{artist_id}/play",
    response_model=PlayResponse,
    responses={status.HTTP_502_BAD_GATEWAY: {"model": PlayResponse}},
)
async def play_artist(
    artist_id: int,
    dispatcher: PlaybackDispatcher = Depends(get_playback_dispatcher),
) -> PlayResponse | JSONResponse:
    """Play the artist's video on the configured media player."""
    outcome = await dispatcher.play(artist_id)
    body = PlayResponse(
        success=outcome.success,
        message=outcome.message,
        turn_on_status=outcome.turn_on_status,
        play_status=outcome.play_status,
    )
    if not outcome.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content=body.model_dump()
        )
    return body
