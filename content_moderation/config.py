"""Configuration management for content-moderation.

Loads settings from environment variables and .env file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Config:
    """Application configuration."""

    # Cloudinary Admin API
    CLOUDINARY_CLOUD_NAME: Optional[str] = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY: Optional[str] = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET: Optional[str] = os.getenv("CLOUDINARY_API_SECRET")
    CLOUDINARY_API_URL: str = os.getenv("CLOUDINARY_API_URL", "https://api.cloudinary.com/v1_1")

    # Provider calls
    PROVIDER_RATE_LIMIT: float = float(os.getenv("PROVIDER_RATE_LIMIT", "2.0"))
    HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", "15"))

    # Pause between processing stages (seconds)
    VIDEO_STAGE_DELAY: float = float(os.getenv("VIDEO_STAGE_DELAY", "0.8"))
    PHOTO_STAGE_DELAY: float = float(os.getenv("PHOTO_STAGE_DELAY", "0.4"))

    # Horror scoring from dominant colours (off by default)
    USE_COLOR_ANALYSIS: bool = os.getenv("USE_COLOR_ANALYSIS", "false").lower() in ("1", "true", "yes")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def has_cloudinary_credentials(cls) -> bool:
        return bool(cls.CLOUDINARY_CLOUD_NAME and cls.CLOUDINARY_API_KEY and cls.CLOUDINARY_API_SECRET)

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of warnings/errors
        """
        warnings = []

        if not cls.has_cloudinary_credentials():
            warnings.append(
                "Cloudinary credentials not set - provider moderation labels will be unavailable "
                "and classification will rely on text analysis only."
            )

        if cls.PROVIDER_RATE_LIMIT <= 0:
            warnings.append(f"PROVIDER_RATE_LIMIT must be positive (got {cls.PROVIDER_RATE_LIMIT})")

        if cls.VIDEO_STAGE_DELAY < 0 or cls.PHOTO_STAGE_DELAY < 0:
            warnings.append("Stage delays must not be negative")

        return warnings

    @classmethod
    def print_status(cls):
        """Print configuration status."""
        from rich.console import Console
        from rich.table import Table

        console = Console()

        table = Table(title="Content Moderation Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="yellow")
        table.add_column("Status", style="green")

        # Cloudinary
        if cls.CLOUDINARY_CLOUD_NAME:
            table.add_row("Cloudinary Cloud", cls.CLOUDINARY_CLOUD_NAME, "✓ Set")
        else:
            table.add_row("Cloudinary Cloud", "Not set", "✗ Missing")

        if cls.CLOUDINARY_API_KEY and cls.CLOUDINARY_API_SECRET:
            key_preview = cls.CLOUDINARY_API_KEY[:4] + "..." if len(cls.CLOUDINARY_API_KEY) > 4 else "***"
            table.add_row("Cloudinary API Key", key_preview, "✓ Set")
        else:
            table.add_row("Cloudinary API Key", "Not set", "✗ Missing")

        # Provider calls
        table.add_row("Provider Rate Limit", f"{cls.PROVIDER_RATE_LIMIT} req/s", "✓")
        table.add_row("HTTP Timeout", f"{cls.HTTP_TIMEOUT} s", "✓")

        # Processing
        table.add_row("Video Stage Delay", f"{cls.VIDEO_STAGE_DELAY} s", "✓")
        table.add_row("Photo Stage Delay", f"{cls.PHOTO_STAGE_DELAY} s", "✓")
        table.add_row("Color Analysis", "On" if cls.USE_COLOR_ANALYSIS else "Off", "✓")

        console.print(table)

        # Print warnings
        warnings = cls.validate()
        if warnings:
            console.print("\n[yellow]Warnings:[/yellow]")
            for warning in warnings:
                console.print(f"  ⚠️  {warning}")


def setup_logging(level: Optional[str] = None) -> None:
    """Route log records through rich's handler."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# Singleton instance
config = Config()
