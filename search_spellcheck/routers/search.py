"""Search router: runs a registered view over the request's query string."""

import logging

from fastapi import APIRouter, Query, Request

from search_spellcheck.modules.search.schemas import RenderedArea, SearchViewResponse
from search_spellcheck.modules.spellcheck.area import SpellcheckArea
from search_spellcheck.modules.views.render import render_html

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["Search"])

# Query-string parameters that control rendering rather than filter the view.
CONTROL_PARAMS = {"preview", "offset"}


@router.get("/{view_id}", response_model=SearchViewResponse)
def search_view(
    view_id: str,
    request: Request,
    preview: bool = Query(False, description="Render as live preview (no shared cache)"),
    offset: int = Query(0, ge=0),
):
    """
    Execute a search view.

    - Every query-string parameter except `preview`/`offset` is exposed input.
    - Area handlers run their pre-query/post-execute hooks around the backend search.
    - Returns results, each rendered area (elements + HTML), and per-filter corrections
      (only for spellcheck areas that are shown).
    """
    view = request.app.state.views.create(view_id)
    exposed_input = {
        key: value for key, value in request.query_params.items() if key not in CONTROL_PARAMS
    }
    view.set_exposed_input(exposed_input)
    view.set_request(request.url.path, exposed_input)
    view.set_offset(offset)
    view.live_preview = preview

    areas = []
    corrections = {}
    for config, handler, elements in view.render_areas():
        areas.append(
            RenderedArea(
                handler=handler.plugin_id,
                region=config.region,
                elements=[element.model_dump() for element in elements],
                html=render_html(elements),
            )
        )
        if isinstance(handler, SpellcheckArea) and handler.should_render(view.empty):
            corrections.update(handler.suggestion_map())

    return SearchViewResponse(
        view_id=view.id,
        display_id=view.display_id,
        keys=view.query.keys if view.query else "",
        total=view.total_rows,
        results=view.result,
        areas=areas,
        corrections=corrections,
    )
