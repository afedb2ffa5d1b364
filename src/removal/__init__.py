"""Blob removal planning and execution."""

from __future__ import annotations

from removal.bfg import BFG_PLACEHOLDER, BfgTool, resolve_bfg_tool
from removal.planner import RemovalPlan, RemovalPlanner

__all__ = ["BFG_PLACEHOLDER", "BfgTool", "RemovalPlan", "RemovalPlanner", "resolve_bfg_tool"]
