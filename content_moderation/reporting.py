"""Human-readable rendering of moderation results."""

from typing import Optional

from content_moderation.moderation.schema import Category, ContentRating, Detection, ModerationResult


def format_detection(detection: Optional[Detection]) -> str:
    """
    One-line summary of a detection.

    Examples:
        >>> format_detection(Detection(detected=True, confidence=0.9))
        'DETECTED (90.0% confidence)'
        >>> format_detection(None)
        'Not analyzed'
    """
    if detection is None:
        return "Not analyzed"
    label = "DETECTED" if detection.detected else "Clear"
    return f"{label} ({detection.confidence * 100:.1f}% confidence)"


def summary_lines(title: str, result: ModerationResult) -> list[str]:
    """Plain-text summary, one line per field, for log output."""
    lines = [
        f"Title: {title}",
        f"Content Rating: {result.content_rating.value.upper()}",
        f"Sensitivity Status: {result.sensitivity_status.value}",
        f"Reason: {result.reason}",
        f"Method: {result.analysis.analysis_method}",
    ]
    for category in Category:
        lines.append(f"  {category.value.capitalize()}: {format_detection(result.analysis[category])}")
    return lines


def print_moderation_summary(title: str, result: ModerationResult, console=None) -> None:
    """Print a rich table of the six detections and the final rating."""
    from rich.console import Console
    from rich.table import Table

    console = console or Console()

    rating_style = "red" if result.content_rating == ContentRating.ADULT else "green"
    console.print(f"\n[bold]{title}[/bold]")
    console.print(
        f"Rating: [{rating_style}]{result.content_rating.value.upper()}[/{rating_style}] "
        f"({result.sensitivity_status.value}) - {result.reason}"
    )

    table = Table(title=f"Detection Results ({result.analysis.analysis_method})")
    table.add_column("Category", style="cyan")
    table.add_column("Detected", style="yellow")
    table.add_column("Confidence", justify="right")
    table.add_column("Source")
    table.add_column("Evidence", style="dim")

    for category in Category:
        detection = result.analysis[category]
        table.add_row(
            category.value,
            "⚠️  yes" if detection.detected else "✓ no",
            f"{detection.confidence * 100:.1f}%",
            detection.source,
            ", ".join(detection.matched_keywords),
        )

    console.print(table)
