"""webpforge: content-addressed WebP variant cache for build pipelines.

Intercepts ``*.webp`` references to raster assets, transcodes each distinct
source content at most once, and rewrites the reference to either the
cached ``<stem>.<fingerprint>.webp`` artifact or the original file.
"""

__version__ = "0.2.0"
__description__ = "Content-addressed WebP variant cache for build pipelines"

from webpforge.core.engine import TransformationEngine
from webpforge.core.forge import Forge
from webpforge.core.interceptor import RequestInterceptor

__all__ = ["Forge", "RequestInterceptor", "TransformationEngine", "__version__"]
