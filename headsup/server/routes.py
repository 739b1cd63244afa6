"""
HTTP API Routes for the heads-up table.

A single local table: the caller plays seat 0, the scripted agent plays
seat 1 on the server's event loop.
"""

from typing import Dict, Any, Optional
from fastapi import APIRouter, HTTPException
import logging

from headsup.core.rules import ActionType, PlayerAction, TableConfig
from headsup.server.schemas import (
    InitTableRequest, ActionRequest, ActionResultSchema,
    LegalActionsSchema, TableStateSchema,
)
from headsup.table import AsyncioScheduler, TableController

router = APIRouter()
logger = logging.getLogger(__name__)

# Single table for the local process
_table: Optional[TableController] = None


def get_table() -> TableController:
    """Get the current table."""
    if _table is None:
        raise HTTPException(status_code=400, detail="Table not initialized")
    return _table


@router.post("/init_table", response_model=TableStateSchema)
async def init_table(req: InitTableRequest) -> Dict[str, Any]:
    """
    Set up a fresh table.

    Any hand in progress on the previous table is abandoned.
    """
    global _table

    try:
        config = TableConfig(
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            starting_stack=req.starting_stack,
            carry_stacks=req.carry_stacks,
            opponent_delay=req.opponent_delay,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if _table is not None:
        _table.shutdown()
    _table = TableController(config=config, scheduler=AsyncioScheduler())
    logger.info(f"Table initialized: blinds {config.small_blind}/{config.big_blind}")
    return _table.get_state()


@router.post("/start_hand", response_model=TableStateSchema)
async def start_hand() -> Dict[str, Any]:
    """
    Start a new hand.

    Deals cards and posts blinds.
    """
    table = get_table()

    if not table.start_new_hand():
        raise HTTPException(status_code=400, detail="Cannot start hand")

    return table.get_state()


@router.get("/state", response_model=TableStateSchema)
async def get_state() -> Dict[str, Any]:
    """Get the current table state as seen from the caller's seat."""
    return get_table().get_state()


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions() -> Dict[str, Any]:
    """Legal actions for the caller; empty when it is not the caller's turn."""
    table = get_table()
    game = table.game

    if game.current_player is None or game.current_player_index != table.human_seat:
        return {"actions": []}

    return {"actions": game.get_legal_actions()}


@router.post("/action", response_model=ActionResultSchema)
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take an action for the caller's seat.

    Refused actions leave the table untouched and report success=false.
    """
    table = get_table()

    try:
        action_type = ActionType(req.action.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action}")

    amount = req.amount if action_type == ActionType.RAISE else 0
    result = table.perform_action(PlayerAction(action_type, amount))

    return {
        "success": result.success,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "state": table.get_state(),
    }


@router.post("/reset")
async def reset_table() -> Dict[str, Any]:
    """Drop the table (for development/testing)."""
    global _table
    if _table is not None:
        _table.shutdown()
    _table = None
    return {"success": True, "message": "Table reset"}
