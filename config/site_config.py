"""
Site and Dataset Configuration.

Exports:
    DatasetConfig: Where the movie CSV comes from
    SiteConfig: Static site output and search API defaults
"""

import os
from pydantic import BaseModel, Field

from .defaults import DatasetDefaults, SiteDefaults


class DatasetConfig(BaseModel):
    """
    Movie dataset source.

    Environment Variables:
        DATASET_URL   - CSV download URL (default: IMDB-Movie-Data.csv on GitHub)
        DATASET_PATH  - Local path to read/write the CSV (default: "IMDB-Movie-Data.csv")
    """

    url: str = Field(default=DatasetDefaults.URL, description="CSV download URL")
    local_path: str = Field(default=DatasetDefaults.LOCAL_FILENAME, description="Local CSV path")
    download_timeout_seconds: float = Field(default=DatasetDefaults.DOWNLOAD_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_environment(cls):
        return cls(
            url=os.environ.get("DATASET_URL", DatasetDefaults.URL),
            local_path=os.environ.get("DATASET_PATH", DatasetDefaults.LOCAL_FILENAME),
        )


class SiteConfig(BaseModel):
    """
    Static site generation and search API settings.

    SEARCH_API_URL / SEARCH_API_KEY become the page's default settings;
    a user can still override them from the page's settings panel.

    Environment Variables:
        SITE_OUTPUT_DIR     - Directory the site is rendered into (default: "website")
        SEARCH_API_URL      - Movie search endpoint (default: empty)
        SEARCH_API_KEY      - Ocp-Apim-Subscription-Key value (default: empty)
        SITE_SETTINGS_FILE  - Local settings store for the search CLI
    """

    output_dir: str = Field(default=SiteDefaults.OUTPUT_DIR)
    search_api_url: str = Field(default=SiteDefaults.SEARCH_API_URL)
    search_api_key: str = Field(default=SiteDefaults.SEARCH_API_KEY, repr=False)
    settings_file: str = Field(default=SiteDefaults.SETTINGS_FILE)
    settings_entry: str = Field(default=SiteDefaults.SETTINGS_ENTRY)
    search_timeout_seconds: float = Field(default=SiteDefaults.SEARCH_TIMEOUT_SECONDS, gt=0)

    @classmethod
    def from_environment(cls):
        return cls(
            output_dir=os.environ.get("SITE_OUTPUT_DIR", SiteDefaults.OUTPUT_DIR),
            search_api_url=os.environ.get("SEARCH_API_URL", SiteDefaults.SEARCH_API_URL),
            search_api_key=os.environ.get("SEARCH_API_KEY", SiteDefaults.SEARCH_API_KEY),
            settings_file=os.environ.get("SITE_SETTINGS_FILE", SiteDefaults.SETTINGS_FILE),
        )

    def default_settings(self):
        """SiteSettings built from the configured defaults."""
        from core.models.site import SiteSettings

        return SiteSettings(url=self.search_api_url, key=self.search_api_key)

    def debug_dict(self) -> dict:
        return {
            "output_dir": self.output_dir,
            "search_api_url": self.search_api_url,
            "search_api_key": '***MASKED***' if self.search_api_key else None,
            "settings_file": self.settings_file,
        }
