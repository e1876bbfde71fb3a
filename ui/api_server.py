"""
API Server for the Asset Vault.

This FastAPI server provides:
1. CRUD endpoints for assets and categories (write-through to the vault store)
2. Filtered/sorted gallery listing and the tag vocabulary
3. Settings (Gemini API key, background theme)
4. /api/suggest for Gemini metadata suggestions

Run with: uvicorn ui.api_server:app --reload --port 8000
"""

import logging
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import DATA_DIR, GEMINI_MODEL, HOST, LOGS_DIR, PORT
from models import AppState, AssetData, AssetForm, AssetValidationError, FileStore
from models.asset_form import NEED_TEXT_MESSAGE
from models.theme import BG_PRESETS
from models.views import SORT_LABELS, SORT_OPTIONS, ViewFilter, empty_state_message, thumbnail_url

# =============================================================================
# Setup Logging: File + Console
# =============================================================================

LOGS_DIR.mkdir(exist_ok=True)

# Generate session log filename with timestamp
_session_start = time.strftime("%Y%m%d_%H%M%S")
_log_file = LOGS_DIR / f"server_{_session_start}.log"

# Use force=True to override any existing handlers (uvicorn issue)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(_log_file, mode='a'),
        logging.StreamHandler()
    ],
    force=True
)
logger = logging.getLogger("api_server")
logger.setLevel(logging.INFO)
logger.info(f"Server session started. Log file: {_log_file}")


# =============================================================================
# Request/Response Models
# =============================================================================

class CamelModel(BaseModel):
    """Accepts camelCase JSON, matching the persisted record shape."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetPayload(CamelModel):
    """Editable asset fields sent by the add/edit form."""
    name: str = ""
    source_url: str = ""
    image_url: str = ""
    category_id: str = "cars"
    description: str = ""
    tags: list[str] = []

    def to_data(self) -> AssetData:
        return AssetData(
            name=self.name,
            source_url=self.source_url,
            image_url=self.image_url,
            category_id=self.category_id,
            description=self.description,
            tags=list(self.tags),
        )


class CategoryPayload(BaseModel):
    """Request to create (or look up) a category by display name."""
    name: str


class ApiKeyPayload(CamelModel):
    api_key: str


class BackgroundPayload(BaseModel):
    """Custom background from the color picker."""
    color: str
    gradient: bool = True


class PresetPayload(BaseModel):
    name: str


class SuggestPayload(CamelModel):
    """Current form draft; the description wins over the name as prompt."""
    name: str = ""
    description: str = ""
    category_id: str = ""
    tags: list[str] = []


# =============================================================================
# Helpers
# =============================================================================

def _state(request: Request) -> AppState:
    return request.app.state.vault_state


def _asset_view(state: AppState, asset) -> dict:
    """Asset record plus its resolved category and display thumbnail."""
    category = state.vault.resolve_category(asset.category_id)
    return {
        **asset.to_dict(),
        "category": category.to_dict(),
        "thumbnailUrl": thumbnail_url(asset),
    }


def _settings_view(state: AppState) -> dict:
    if state.api_key:
        key_source = "saved"
    elif state.effective_api_key:
        key_source = "environment"
    else:
        key_source = None
    return {
        "hasApiKey": bool(state.effective_api_key),
        "apiKeySource": key_source,
        "background": state.theme.background,
        "pickerColor": state.theme.picker_color,
        "gradient": state.theme.gradient,
        "dark": state.theme.dark,
        "presets": [
            {"name": p.name, "value": p.value, "color": p.color} for p in BG_PRESETS
        ],
    }


def _validation_error(e: AssetValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": str(e), "missing": e.missing})


# =============================================================================
# App Factory
# =============================================================================

def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Build the API around `state` (defaults to the on-disk vault)."""
    if state is None:
        state = AppState.load(FileStore(DATA_DIR))

    app = FastAPI(
        title="Asset Vault API",
        description="Personal catalog of 3D model and mod links",
        version="0.1.0",
    )
    app.state.vault_state = state

    # CORS middleware for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Status
    # =========================================================================

    @app.get("/")
    async def root():
        return {"message": "Asset Vault API", "status": "running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "model": GEMINI_MODEL}

    # =========================================================================
    # Assets
    # =========================================================================

    @app.get("/api/assets")
    async def list_assets(
        request: Request,
        category: str = "all",
        tag: list[str] = Query(default=[]),
        q: str = "",
        sort: str = "newest",
    ):
        """Gallery listing with the same predicates and sorts as the UI."""
        if sort not in SORT_OPTIONS:
            raise HTTPException(status_code=400, detail=f"Unknown sort option: {sort}")
        state = _state(request)
        view_filter = ViewFilter(category_id=category, tags=list(tag), search=q, sort=sort)
        visible = view_filter.apply(state.vault.assets)
        return {
            "count": len(visible),
            "assets": [_asset_view(state, a) for a in visible],
            "emptyMessage": None if visible else empty_state_message(view_filter),
            "sortOptions": SORT_LABELS,
        }

    @app.post("/api/assets", status_code=201)
    async def create_asset(payload: AssetPayload, request: Request):
        state = _state(request)
        try:
            asset = state.vault.add_asset(payload.to_data())
        except AssetValidationError as e:
            raise _validation_error(e)
        return _asset_view(state, asset)

    @app.get("/api/assets/{asset_id}")
    async def get_asset(asset_id: str, request: Request):
        state = _state(request)
        asset = state.vault.get_asset(asset_id)
        if asset is None:
            raise HTTPException(status_code=404, detail=f"Asset not found: {asset_id}")
        return _asset_view(state, asset)

    @app.put("/api/assets/{asset_id}")
    async def update_asset(asset_id: str, payload: AssetPayload, request: Request):
        state = _state(request)
        try:
            asset = state.vault.update_asset(asset_id, payload.to_data())
        except AssetValidationError as e:
            raise _validation_error(e)
        if asset is None:
            raise HTTPException(status_code=404, detail=f"Asset not found: {asset_id}")
        return _asset_view(state, asset)

    @app.delete("/api/assets/{asset_id}")
    async def delete_asset(asset_id: str, request: Request, confirm: bool = False):
        """Removal needs an explicit ?confirm=true from the user's dialog."""
        state = _state(request)
        if state.vault.get_asset(asset_id) is None:
            raise HTTPException(status_code=404, detail=f"Asset not found: {asset_id}")
        if not state.delete_asset(asset_id, confirm=lambda asset: confirm):
            raise HTTPException(
                status_code=409,
                detail="Are you sure you want to remove this asset? Repeat with confirm=true.",
            )
        return {"deleted": asset_id}

    @app.get("/api/tags")
    async def list_tags(request: Request):
        return {"tags": _state(request).available_tags()}

    # =========================================================================
    # Categories
    # =========================================================================

    @app.get("/api/categories")
    async def list_categories(request: Request):
        return {"categories": [c.to_dict() for c in _state(request).vault.categories]}

    @app.post("/api/categories")
    async def create_category(payload: CategoryPayload, request: Request):
        """Idempotent by case-insensitive name; returns the category."""
        state = _state(request)
        try:
            category_id = state.vault.add_category(payload.name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return state.vault.resolve_category(category_id).to_dict()

    # =========================================================================
    # Settings
    # =========================================================================

    @app.get("/api/settings")
    async def get_settings(request: Request):
        return _settings_view(_state(request))

    @app.put("/api/settings/api-key")
    async def save_api_key(payload: ApiKeyPayload, request: Request):
        state = _state(request)
        state.save_api_key(payload.api_key)
        return _settings_view(state)

    @app.put("/api/settings/background")
    async def save_background(payload: BackgroundPayload, request: Request):
        state = _state(request)
        state.theme.gradient = payload.gradient
        state.pick_background_color(payload.color)
        return _settings_view(state)

    @app.put("/api/settings/background/preset")
    async def select_preset(payload: PresetPayload, request: Request):
        state = _state(request)
        try:
            state.select_preset_named(payload.name)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _settings_view(state)

    # =========================================================================
    # AI Suggestions
    # =========================================================================

    @app.post("/api/suggest")
    async def suggest(payload: SuggestPayload, request: Request):
        """
        Draft title/category/tags with Gemini and merge them into the draft.

        Unmatched categories are created, so the returned categoryId always
        exists. The draft tags come back merged with the suggested ones.
        """
        state = _state(request)
        form = AssetForm(state.vault)
        form.open()
        form.data = AssetData(
            name=payload.name,
            description=payload.description,
            category_id=payload.category_id or form.default_category_id(),
            tags=list(payload.tags),
        )

        applied = await form.suggest(state.suggester())
        if not applied:
            if form.needs_api_key or form.error == NEED_TEXT_MESSAGE:
                raise HTTPException(status_code=400, detail=form.error)
            raise HTTPException(status_code=502, detail=form.error)

        return {
            "name": form.data.name,
            "categoryId": form.data.category_id,
            "category": state.vault.resolve_category(form.data.category_id).to_dict(),
            "tags": form.data.tags,
            "reasoning": form.reasoning,
        }

    return app


app = create_app()


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    print("\n" + "=" * 60)
    print("Asset Vault API Server")
    print("=" * 60)
    print(f"Model: {GEMINI_MODEL}")
    print(f"Data: {DATA_DIR}")
    print(f"API Docs: http://{HOST}:{PORT}/docs")
    print("=" * 60 + "\n")

    uvicorn.run(app, host=HOST, port=PORT)
