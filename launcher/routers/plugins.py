"""Plugin REST API endpoints - listing, matching and execution."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from launcher.dependencies import get_plugin_manager, get_plugin_matcher
from launcher.models.requests import ExecuteRequest, PriorityUpdate
from launcher.plugins.manager import PluginManager
from launcher.plugins.matcher import PluginMatcher
from launcher.services.host import HostBridge
from launcher.services.search_service import SearchSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plugins", tags=["plugins"])


@router.get("/")
async def list_plugins(manager: PluginManager = Depends(get_plugin_manager)):
    """List all registered plugins and their settings."""
    return {"plugins": manager.list_plugins()}


@router.get("/match")
async def match_plugins(
    q: str = Query("", description="Launcher input text"),
    manager: PluginManager = Depends(get_plugin_manager),
    matcher: PluginMatcher = Depends(get_plugin_matcher),
):
    """Rank enabled plugins against a query."""
    matches = matcher.match(q, manager.registry.get_enabled())
    return {
        "query": q,
        "matches": [
            {**m.to_dict(), "preview": m.plugin.preview(m.extracted_input)}
            for m in matches
        ],
    }


@router.post("/execute")
async def execute_plugin(
    body: ExecuteRequest,
    manager: PluginManager = Depends(get_plugin_manager),
    matcher: PluginMatcher = Depends(get_plugin_matcher),
):
    """Match a query and run the selected plugin.

    Browser opening is disabled; opened URLs are returned as effects.
    """
    session = SearchSession(manager.registry, matcher=matcher, usage=manager.usage)
    session.set_query(body.query)
    if not session.matches:
        raise HTTPException(status_code=404, detail=f"No plugin matches '{body.query}'")

    try:
        session.select(body.index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))

    host = HostBridge(open_browser=False, clipboard=body.clipboard)
    outcome = await session.execute_selected(host)
    return {**outcome.to_dict(), "effects": host.effects()}


@router.get("/{plugin_id}")
async def get_plugin(plugin_id: str, manager: PluginManager = Depends(get_plugin_manager)):
    """Get detailed information about a specific plugin."""
    info = manager.get_plugin_info(plugin_id)
    if not info:
        raise HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not found")
    return info


@router.post("/{plugin_id}/enable")
async def enable_plugin(plugin_id: str, manager: PluginManager = Depends(get_plugin_manager)):
    """Enable a plugin. Takes effect on the next query."""
    plugin = manager.enable_plugin(plugin_id)
    if not plugin:
        raise HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not found")
    return {"message": f"Plugin '{plugin_id}' enabled", "plugin": plugin.to_dict()}


@router.post("/{plugin_id}/disable")
async def disable_plugin(plugin_id: str, manager: PluginManager = Depends(get_plugin_manager)):
    """Disable a plugin. It stays registered but no longer matches."""
    plugin = manager.disable_plugin(plugin_id)
    if not plugin:
        raise HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not found")
    return {"message": f"Plugin '{plugin_id}' disabled", "plugin": plugin.to_dict()}


@router.put("/{plugin_id}/priority")
async def update_priority(
    plugin_id: str,
    body: PriorityUpdate,
    manager: PluginManager = Depends(get_plugin_manager),
):
    """Change a plugin's tie-break priority."""
    plugin = manager.set_priority(plugin_id, body.priority)
    if not plugin:
        raise HTTPException(status_code=404, detail=f"Plugin '{plugin_id}' not found")
    return {"message": f"Priority of '{plugin_id}' set to {body.priority}", "plugin": plugin.to_dict()}
