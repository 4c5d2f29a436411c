"""HTTP clients for the services chart generation depends on.

vis_api: Chart API and Map API (remote rendering)
render_service: external renderer used as the local-render fallback
upload: file service returning public image URLs
"""

from .render_service import RenderServiceClient
from .upload import UploadClient
from .vis_api import VisApiClient

__all__ = ["RenderServiceClient", "UploadClient", "VisApiClient"]
