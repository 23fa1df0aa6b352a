# api/main.py
"""
FastAPI backend for brick_stack - exposes the settlement engine as a REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from typing import List, Optional
import sys
import logging
from pathlib import Path

# Add project root to path to import brick_stack
sys.path.insert(0, str(Path(__file__).parent.parent))

from brick_stack.config import SettleConfig
from brick_stack.kernel import SettleResult, SettlementError, settle_bricks
from brick_stack.model import BrickGeometryError
from brick_stack.parse import BrickParseError, parse_bricks
from brick_stack.support import SupportGraph

logger = logging.getLogger("brick_stack.api")


app = FastAPI(
    title="Brick Stack API",
    description="Brick settlement and support-graph engine",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class SettleRequest(BaseModel):
    """Snapshot to settle."""
    bricks: str = Field(..., description="One brick per line: x1,y1,z1~x2,y2,z2 [<- label]")
    validate_geometry: bool = Field(True, description="Reject bricks that are not axis-aligned")


class BrickData(BaseModel):
    """Settled brick."""
    index: int
    label: Optional[str] = None
    lower: List[int]
    upper: List[int]
    fell_by: int
    supported_by: List[int]
    removable: bool


class SettleResponse(BaseModel):
    """Complete settlement result."""
    n_bricks: int
    n_removable: int
    removable: List[int]
    chain_reaction_total: int
    bricks: List[BrickData]


# =============================================================================
# Settlement
# =============================================================================

def run_settlement(request: SettleRequest) -> SettleResult:
    """Parse and settle, translating failures into HTTP errors."""
    try:
        bricks = parse_bricks(request.bricks)
        return settle_bricks(bricks, SettleConfig(validate_geometry=request.validate_geometry))
    except (BrickParseError, BrickGeometryError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SettlementError as e:
        logger.warning("settlement failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


def build_response(result: SettleResult) -> SettleResponse:
    graph = SupportGraph.from_result(result)
    bricks = [
        BrickData(
            index=i,
            label=brick.label,
            lower=[brick.lower.x, brick.lower.y, brick.lower.z],
            upper=[brick.upper.x, brick.upper.y, brick.upper.z],
            fell_by=result.fell_by[i],
            supported_by=sorted(result.supported_by[i]),
            removable=i in result.removable,
        )
        for i, brick in enumerate(result.bricks)
    ]
    return SettleResponse(
        n_bricks=len(result.bricks),
        n_removable=result.n_removable,
        removable=sorted(result.removable),
        chain_reaction_total=graph.total_chain_reaction(),
        bricks=bricks,
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "Brick Stack API"}


@app.post("/api/settle", response_model=SettleResponse)
async def settle(request: SettleRequest):
    """Settle a snapshot and report removable bricks."""
    return build_response(run_settlement(request))


@app.post("/api/export/csv")
async def export_csv(request: SettleRequest):
    """Export the per-brick report as CSV."""
    result = run_settlement(request)
    csv_text = SupportGraph.from_result(result).to_dataframe().to_csv(index=False)
    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=bricks.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
