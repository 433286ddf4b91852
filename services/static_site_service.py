"""
Static Site Service - render and publish the MovieFinder page.

StaticSiteBuilder renders index.html and 404.html from the Jinja2 templates
in templates/site. The default search settings are embedded in the page;
a visitor's saved settings (localStorage entry "apiSettings") take
precedence field by field.

StaticSitePublisher uploads every file of a rendered site into the
storage account's $web container with a browser-friendly content type.

Exports:
    StaticSiteBuilder: Render the site to a directory
    StaticSitePublisher: Upload a directory to the website container
    guess_content_type: Content type for a site file
"""

import mimetypes
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import SiteConfig, StorageConfig
from config.defaults import SiteDefaults
from core.models import SiteSettings
from infrastructure.interface_repository import IStaticWebsiteRepository
from templates_utils import render_template
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "StaticSite")

PAGE_TITLE = "MovieFinder"

_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}


def guess_content_type(path: Path) -> str:
    """Content type for upload; unknown extensions are octet-stream."""
    content_type = _CONTENT_TYPES.get(path.suffix.lower())
    if content_type:
        return content_type
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


class StaticSiteBuilder:
    """
    Render the static site.

    Usage:
        builder = StaticSiteBuilder()
        files = builder.build("website", SiteSettings(url=api_url, key=api_key))
    """

    def __init__(self, storage: Optional[StorageConfig] = None, site: Optional[SiteConfig] = None):
        self.storage = storage or StorageConfig()
        self.site = site or SiteConfig()

    def _context(self, settings: SiteSettings) -> Dict[str, Any]:
        return {
            "page_title": PAGE_TITLE,
            "default_settings": {"url": settings.url, "key": settings.key},
            "settings_entry": self.site.settings_entry,
            "subscription_key_header": SiteDefaults.SUBSCRIPTION_KEY_HEADER,
            "index_document": self.storage.index_document,
        }

    def build(self, output_dir: str, settings: Optional[SiteSettings] = None) -> List[Path]:
        """
        Render index and 404 pages into output_dir.

        Args:
            output_dir: Target directory (created if missing)
            settings: Default search settings embedded in the page

        Returns:
            Paths of the written files
        """
        settings = settings or SiteSettings()
        target = Path(output_dir)
        target.mkdir(parents=True, exist_ok=True)

        context = self._context(settings)
        pages = {
            self.storage.index_document: "site/index.html.j2",
            self.storage.error_document: "site/404.html.j2",
        }

        written = []
        for filename, template_name in pages.items():
            path = target / filename
            path.write_text(render_template(template_name, **context), encoding="utf-8")
            written.append(path)
            logger.debug(f"Rendered {template_name} -> {path}")

        if not settings.is_configured:
            logger.warning("⚠️ Search API url/key not set - visitors must enter them in the page")

        logger.info(f"✅ Static site built in {target} ({len(written)} files)")
        return written


class StaticSitePublisher:
    """
    Upload a rendered site to the website container.

    Usage:
        publisher = StaticSitePublisher(website_repository)
        uploaded = publisher.publish("website")
    """

    def __init__(self, website: IStaticWebsiteRepository):
        self.website = website

    def publish(self, site_dir: str) -> List[Dict[str, Any]]:
        """
        Upload every file below site_dir, overwriting existing blobs.

        Raises:
            FileNotFoundError: site_dir does not exist
        """
        root = Path(site_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"Site directory not found: {root}")

        uploaded = []
        for path in sorted(p for p in root.rglob("*") if p.is_file()):
            blob_path = path.relative_to(root).as_posix()
            uploaded.append(
                self.website.upload_file(blob_path, path.read_bytes(), guess_content_type(path))
            )

        logger.info(f"🌐 Published {len(uploaded)} files from {root}")
        return uploaded
