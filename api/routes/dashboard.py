"""
HTML dashboard: provider availability, credentials and endpoint list.
"""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from api.deps import get_provider_manager, uptime_seconds
from config.settings import settings
from core.generation.provider_manager import ProviderManager

router = APIRouter(tags=["Dashboard"])

ENDPOINTS = [
    ("POST", "/api/generate-content", "Generate single content piece"),
    ("POST", "/api/generate-snippet", "Generate a short introduction"),
    ("POST", "/api/generate-book", "Generate complete book"),
    ("GET", "/api/ai-status", "Get AI provider status"),
    ("GET", "/api/test-ai", "Test AI connectivity"),
]

_STYLE = """
body { font-family: 'Segoe UI', Arial, sans-serif; background: #1f2937; color: #f9fafb; margin: 0; padding: 20px; }
.container { max-width: 1100px; margin: 0 auto; padding: 32px; }
h1 { text-align: center; margin-bottom: 4px; }
.subtitle { text-align: center; opacity: 0.8; margin-bottom: 32px; }
.grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(300px, 1fr)); gap: 20px; }
.card { background: rgba(255,255,255,0.08); padding: 20px; border-radius: 10px; }
.row { display: flex; justify-content: space-between; padding: 8px 0; }
.available { color: #4ade80; }
.unavailable { color: #f87171; }
.endpoint { font-family: 'Courier New', monospace; background: rgba(0,0,0,0.3); padding: 6px 10px; border-radius: 6px; margin: 4px 0; }
"""


def render_dashboard(manager: ProviderManager) -> str:
    status = manager.get_provider_status()
    provider_rows = "".join(
        f'<div class="row"><strong>{escape(p["name"].upper())}</strong>'
        f'<span class="{"available" if p["available"] else "unavailable"}">'
        f'{"Available" if p["available"] else "Rate Limited"}</span></div>'
        for p in status
    )
    key_rows = "".join(
        f'<div class="row">{escape(p["name"])}<span class="'
        f'{"available" if p["configured"] else "unavailable"}">'
        f'{"Configured" if p["configured"] else "Missing"}</span></div>'
        for p in status
    )
    endpoint_rows = "".join(
        f'<div class="endpoint">{method} {path} - {escape(text)}</div>'
        for method, path, text in ENDPOINTS
    )
    return f"""<html>
  <head>
    <title>{escape(settings.app_name)}</title>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>{_STYLE}</style>
  </head>
  <body>
    <div class="container">
      <h1>{escape(settings.app_name)}</h1>
      <p class="subtitle">AI-Powered Book Creation</p>
      <div class="grid">
        <div class="card"><h3>AI Providers</h3>{provider_rows}</div>
        <div class="card"><h3>System Status</h3>
          <div class="row">Environment<span>{escape(settings.environment)}</span></div>
          <div class="row">Version<span>{escape(settings.app_version)}</span></div>
          <div class="row">Uptime<span>{int(uptime_seconds())} seconds</span></div>
        </div>
        <div class="card"><h3>API Keys</h3>{key_rows}</div>
      </div>
      <div class="card" style="margin-top: 20px;"><h3>Available Endpoints</h3>{endpoint_rows}</div>
    </div>
  </body>
</html>"""


@router.get("/", response_class=HTMLResponse)
async def dashboard(manager: ProviderManager = Depends(get_provider_manager)):
    """Service dashboard"""
    return HTMLResponse(content=render_dashboard(manager))
