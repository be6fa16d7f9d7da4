"""
Metrics Router - Serves the latest X1 network metrics from the dashboard poller
"""
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..constants import polling
from ..tasks.metric_poller import DashboardPoller, PollerState
from ..utils.models import RequestContext, utc_timestamp

# Configure logging
logger = logging.getLogger(__name__)

# Create FastAPI router
router = APIRouter(
    prefix="/metrics",
    tags=["Metrics"],
    responses={404: {"description": "Not found"}},
)

FAILURE_MESSAGES: Dict[str, str] = {
    polling.METRIC_SUPPLY: "Failed to fetch supply data",
    polling.METRIC_EPOCH: "Failed to fetch epoch data",
    polling.METRIC_TRANSACTIONS: "Failed to fetch transaction data",
    polling.METRIC_STAKING: "Failed to fetch staking data",
    polling.METRIC_VALIDATORS: "Failed to fetch validator data",
    polling.METRIC_PING: "Failed to measure RPC ping",
    polling.METRIC_GAS: "Failed to fetch gas prices",
}


def get_poller(request: Request) -> DashboardPoller:
    """Dashboard poller owned by the application lifespan"""
    return request.app.state.poller


def _envelope(metric: str, state: PollerState) -> JSONResponse:
    message = FAILURE_MESSAGES.get(metric, f"Failed to fetch {metric} data")

    if not state.has_value:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": message,
                "timestamp": utc_timestamp(),
            },
        )

    content: Dict[str, Any] = {
        "success": True,
        "data": state.last_value.to_dict(),
    }
    if state.has_error:
        content["stale"] = True
        content["error"] = message
        content["lastUpdated"] = state.last_updated
    return JSONResponse(content=content)


async def _metric_response(metric: str, poller: DashboardPoller) -> JSONResponse:
    context = RequestContext.new(metric)
    try:
        state = await poller.get(metric, context)
        response = _envelope(metric, state)
    except Exception as e:
        logger.error(f"{context} error serving metric: {str(e)}")
        logger.exception(e)
        response = JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": FAILURE_MESSAGES.get(metric, f"Failed to fetch {metric} data"),
                "timestamp": utc_timestamp(),
            },
        )

    response.headers["X-Request-ID"] = context.correlation_id
    return response


@router.get("/supply")
async def get_supply(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """
    Token supply in XNT.

    Returns total, circulating and non-circulating supply.
    """
    return await _metric_response(polling.METRIC_SUPPLY, poller)


@router.get("/epoch")
async def get_epoch(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """
    Current epoch position.

    Returns the epoch number, slot index, slots in epoch, absolute slot,
    block height, transaction count, progress percentage and the estimated
    milliseconds remaining.
    """
    return await _metric_response(polling.METRIC_EPOCH, poller)


@router.get("/transactions")
async def get_transactions(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """Cumulative transaction count and transactions per second."""
    return await _metric_response(polling.METRIC_TRANSACTIONS, poller)


@router.get("/staking")
async def get_staking(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """Total, active and inactive stake in XNT."""
    return await _metric_response(polling.METRIC_STAKING, poller)


@router.get("/validators")
async def get_validators(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """
    Validator list with aggregate statistics.

    Current validators come first, followed by delinquent ones. Stats cover
    commission (average, min, max), total credits and the potential and
    genesis airdrop estimates.
    """
    return await _metric_response(polling.METRIC_VALIDATORS, poller)


@router.get("/ping")
async def get_ping(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """RPC round-trip time in milliseconds."""
    return await _metric_response(polling.METRIC_PING, poller)


@router.get("/gas")
async def get_gas(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """Normal and fast per-signature fee estimates in XNT."""
    return await _metric_response(polling.METRIC_GAS, poller)


@router.get("")
async def get_all_metrics(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """
    Unified snapshot of every metric's poller state.

    Does not trigger any fetch.
    """
    context = RequestContext.new("all")
    response = JSONResponse(content={
        "success": True,
        "data": poller.to_dict(),
        "timestamp": utc_timestamp(),
    })
    response.headers["X-Request-ID"] = context.correlation_id
    return response


@router.post("/refresh")
async def refresh_metrics(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """Fetch every metric now, bypassing staleness, and return the unified snapshot."""
    context = RequestContext.new("refresh")
    logger.info(f"{context} manual refresh requested")

    states = await poller.refresh_all()
    response = JSONResponse(content={
        "success": True,
        "data": {name: state.to_dict() for name, state in states.items()},
        "timestamp": utc_timestamp(),
    })
    response.headers["X-Request-ID"] = context.correlation_id
    return response


@router.post("/focus")
async def focus_regained(poller: DashboardPoller = Depends(get_poller)) -> JSONResponse:
    """Signal that the dashboard regained focus; refreshes metrics configured for it."""
    context = RequestContext.new("focus")
    refreshed = await poller.focus_regained()
    logger.debug(f"{context} focus regained, refreshed {refreshed}")

    response = JSONResponse(content={
        "success": True,
        "refreshed": refreshed,
        "timestamp": utc_timestamp(),
    })
    response.headers["X-Request-ID"] = context.correlation_id
    return response
