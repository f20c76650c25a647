"""FastAPI main application."""

import threading
import uuid
from typing import Dict, List, Optional, Union

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from ..config import GenerationSettings, settings
from ..core.exceptions import InvalidArgumentError
from ..core.hex_point import HexPoint
from ..core.tile import Biome, Tile
from ..core.world import World, generate_world
from ..utils.log_config import configure_logging

# Configure logging
configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terra API",
    description="Procedural hex terrain generation",
    version="0.1.0",
)

# Generated worlds live in process memory only
_worlds: Dict[str, World] = {}
_worlds_lock = threading.Lock()


# Request/Response models
class WorldGenerationRequest(BaseModel):
    """Request to generate a new world. Omitted fields use the configured defaults."""

    radius: Optional[int] = Field(None, ge=0, description="Number of tile rings around the centre")
    seed: Optional[Union[int, str]] = Field(None, description="World seed")
    pipeline: Optional[str] = Field(None, description="'canonical' or 'terrain'")
    min_peaks: Optional[int] = Field(None, ge=0, description="Minimum number of peaks")
    max_peaks: Optional[int] = Field(None, ge=0, description="Maximum number of peaks")
    rainfall: Optional[float] = Field(None, ge=0, description="Water added to each land tile")
    runoff_iterations: Optional[int] = Field(None, ge=0, description="Maximum runoff passes")
    lake_threshold: Optional[float] = Field(None, ge=0, description="Settled water that forms a lake")
    river_threshold: Optional[float] = Field(None, ge=0, description="Throughput that forms a river")


class WorldSummary(BaseModel):
    """Summary information about a generated world."""

    id: str
    seed: int
    radius: int
    tile_count: int
    stages: List[str]
    generation_time_seconds: float
    biomes: Dict[str, int]
    continents: int
    lakes: int
    rivers: int


class TileInfo(BaseModel):
    """State of a single tile."""

    q: int
    r: int
    s: int
    biome: str
    elevation: int
    water_level: float
    water_traversed: float
    river_connections: Dict[str, str]


class RiverInfo(BaseModel):
    """Information about a river."""

    id: int
    length: int
    flow: float
    source: List[int]
    mouth: Optional[List[int]] = None
    joins: Optional[int] = None


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _get_world(world_id: str) -> World:
    with _worlds_lock:
        world = _worlds.get(world_id)
    if world is None:
        raise HTTPException(status_code=404, detail="World not found")
    return world


def _summary(world_id: str, world: World) -> WorldSummary:
    summary = world.summary()
    return WorldSummary(
        id=world_id,
        seed=summary["seed"],
        radius=summary["radius"],
        tile_count=summary["tile_count"],
        stages=summary["stages"],
        generation_time_seconds=summary["generation_time"],
        biomes=summary["biomes"],
        continents=summary["continents"],
        lakes=summary["lakes"],
        rivers=summary["rivers"],
    )


def _tile_info(tile: Tile) -> TileInfo:
    return TileInfo(**tile.to_dict())


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terra API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    with _worlds_lock:
        count = len(_worlds)
    return {"status": "healthy", "worlds": count}


@app.post("/worlds/generate", response_model=WorldSummary)
def generate(request: WorldGenerationRequest):
    """
    Generate a world synchronously and keep it in memory.

    Returns the world summary including its id for later queries.
    """
    overrides = request.model_dump(exclude_none=True)
    logger.info("World generation requested", request=overrides)

    try:
        generation = GenerationSettings(**{**settings.generation.model_dump(), **overrides})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    if generation.radius > settings.max_world_radius:
        raise HTTPException(
            status_code=422,
            detail=f"Radius {generation.radius} exceeds the maximum of {settings.max_world_radius}",
        )

    world = generate_world(generation)
    world_id = str(uuid.uuid4())
    with _worlds_lock:
        _worlds[world_id] = world
        # The first key is the oldest world
        while len(_worlds) > settings.max_stored_worlds:
            evicted = next(iter(_worlds))
            del _worlds[evicted]
            logger.info("World evicted", world_id=evicted, limit=settings.max_stored_worlds)

    logger.info("World stored", world_id=world_id, seed=world.seed, tiles=len(world))
    return _summary(world_id, world)


@app.get("/worlds", response_model=List[WorldSummary])
async def list_worlds():
    """List all generated worlds."""
    with _worlds_lock:
        items = list(_worlds.items())
    return [_summary(world_id, world) for world_id, world in items]


@app.get("/worlds/{world_id}", response_model=WorldSummary)
async def get_world(world_id: str):
    """Get world details."""
    return _summary(world_id, _get_world(world_id))


@app.delete("/worlds/{world_id}")
async def delete_world(world_id: str):
    """Forget a generated world."""
    with _worlds_lock:
        removed = _worlds.pop(world_id, None)
    if removed is None:
        raise HTTPException(status_code=404, detail="World not found")
    return {"deleted": world_id}


@app.get("/worlds/{world_id}/tiles", response_model=List[TileInfo])
async def get_tiles(world_id: str, biome: Optional[str] = None):
    """All tiles of a world, optionally filtered by biome name."""
    world = _get_world(world_id)
    if biome is None:
        return [_tile_info(tile) for tile in world.all_tiles()]

    try:
        wanted = Biome[biome.upper()]
    except KeyError:
        raise HTTPException(status_code=422, detail=f"Unknown biome: {biome}")
    return [_tile_info(tile) for tile in world.all_tiles() if tile.biome is wanted]


@app.get("/worlds/{world_id}/tiles/{q}/{r}", response_model=TileInfo)
async def get_tile(world_id: str, q: int, r: int):
    """Get the tile at an axial position."""
    world = _get_world(world_id)
    tile = world.tile_at(HexPoint.from_axial(q, r))
    if tile is None:
        raise HTTPException(status_code=404, detail="Tile not found")
    return _tile_info(tile)


@app.get("/worlds/{world_id}/rivers", response_model=List[RiverInfo])
async def get_rivers(world_id: str):
    """Rivers of a world, largest flow first."""
    world = _get_world(world_id)
    rivers = sorted(world.rivers, key=lambda river: river.flow, reverse=True)
    return [
        RiverInfo(
            id=river.id,
            length=river.length,
            flow=river.flow,
            source=[river.source.q, river.source.r, river.source.s],
            mouth=[river.mouth.q, river.mouth.r, river.mouth.s] if river.mouth else None,
            joins=river.joins,
        )
        for river in rivers
    ]


@app.get("/worlds/{world_id}/pixel", response_model=TileInfo)
async def get_tile_at_pixel(world_id: str, x: float, y: float):
    """Get the tile under a screen point."""
    world = _get_world(world_id)
    point = world.tile_containing_screen_point(x, y)
    if point is None:
        raise HTTPException(status_code=404, detail="No tile at this screen point")
    return _tile_info(world.tile_at(point))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
