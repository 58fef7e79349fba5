"""Stat overlay layouts for captured photos and videos.

Clients draw the returned layout on top of each captured frame before
encoding, so every share image and clip carries the same branding.
"""
from dataclasses import dataclass, field
from datetime import date

# Capture canvas
CANVAS_WIDTH = 1080
CANVAS_HEIGHT = 1920

# Logo
LOGO_HEIGHT_RATIO = 0.05
LOGO_MARGIN = 40
LOGO_ALPHA = 0.8
BEFORE_PHOTO_LOGO_Y_RATIO = 0.6
BEFORE_PHOTO_LOGO_ALPHA = 0.5
DEFAULT_LOGO_ASPECT = 1.0  # 250x250 banner

# Stats text
TEXT_COLOR = "#C8102E"
TEXT_ALPHA = 0.8
SHADOW_COLOR = "rgba(0, 0, 0, 0.8)"
SHADOW_BLUR = 20
LEFT_PADDING = 40
TOP_START_RATIO = 0.15
STAT_GAP = 150
VALUE_OFFSET = 60

TITLE_FONT = "bold 48px Arial"
LABEL_FONT = "bold 18px Arial"
VALUE_FONT = "bold 64px Arial"
NAME_FONT = "bold 48px Arial"

VIDEO_MIME_TYPE = "video/webm;codecs=vp8"
PHOTO_MIME_TYPE = "image/jpeg"


@dataclass
class LogoPlacement:
    x: float
    y: float
    width: float
    height: float
    alpha: float


@dataclass
class TextItem:
    text: str
    x: float
    y: float
    font: str


@dataclass
class TextStyle:
    color: str = TEXT_COLOR
    alpha: float = TEXT_ALPHA
    align: str = "left"
    shadow_color: str = SHADOW_COLOR
    shadow_blur: int = SHADOW_BLUR


@dataclass
class OverlayLayout:
    """Everything needed to composite one frame."""
    width: int
    height: int
    mirror: bool
    logo: LogoPlacement
    style: TextStyle = field(default_factory=TextStyle)
    texts: list[TextItem] = field(default_factory=list)
    output_mime_type: str = VIDEO_MIME_TYPE


def format_number(value: float, grouped: bool = False) -> str:
    """Render a number the way the share images show it (no trailing zeros)."""
    if float(value).is_integer():
        return f"{int(value):,}" if grouped else str(int(value))
    text = f"{value:,.3f}" if grouped else f"{value:.3f}"
    return text.rstrip("0").rstrip(".")


def corner_logo(width: int, height: int, aspect: float = DEFAULT_LOGO_ASPECT) -> LogoPlacement:
    """Logo in the top-right corner."""
    logo_height = height * LOGO_HEIGHT_RATIO
    logo_width = aspect * logo_height
    return LogoPlacement(
        x=width - logo_width - LOGO_MARGIN,
        y=LOGO_MARGIN,
        width=logo_width,
        height=logo_height,
        alpha=LOGO_ALPHA,
    )


def _stat_block(
    title: str,
    stats: list[tuple[str, str, str]],
    height: int,
) -> list[TextItem]:
    """Title followed by label/value pairs spaced down the left edge."""
    top = height * TOP_START_RATIO
    items = [TextItem(title, LEFT_PADDING, top, TITLE_FONT)]
    for position, (label, value, font) in enumerate(stats, start=1):
        y = top + STAT_GAP * position
        items.append(TextItem(f"{label}:", LEFT_PADDING, y, LABEL_FONT))
        items.append(TextItem(value, LEFT_PADDING, y + VALUE_OFFSET, font))
    return items


def exercise_overlay(
    exercise_name: str,
    weight_kg: float,
    sets: int,
    reps: int,
    logo_aspect: float = DEFAULT_LOGO_ASPECT,
) -> OverlayLayout:
    """Overlay for a finished exercise: name, weight and volume."""
    weight = weight_kg or 0
    volume = weight * (sets or 0) * (reps or 0)
    return OverlayLayout(
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        mirror=True,
        logo=corner_logo(CANVAS_WIDTH, CANVAS_HEIGHT, logo_aspect),
        texts=_stat_block(
            "Smashed It! 💪",
            [
                ("Exercise", exercise_name, NAME_FONT),
                ("Weight", f"{format_number(weight)}kg", VALUE_FONT),
                ("Volume", f"{format_number(volume)}kg", VALUE_FONT),
            ],
            CANVAS_HEIGHT,
        ),
    )


def workout_overlay(
    exercises_completed: int,
    total_volume: float,
    duration_minutes: int,
    workout_date: date,
    logo_aspect: float = DEFAULT_LOGO_ASPECT,
) -> OverlayLayout:
    """Overlay for a finished workout summary."""
    return OverlayLayout(
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        mirror=True,
        logo=corner_logo(CANVAS_WIDTH, CANVAS_HEIGHT, logo_aspect),
        texts=_stat_block(
            "Workout Complete",
            [
                ("Exercises", str(exercises_completed), VALUE_FONT),
                ("Total Volume", f"{format_number(total_volume, grouped=True)}kg", VALUE_FONT),
                ("Duration", f"{duration_minutes} min", VALUE_FONT),
                ("Date", workout_date.isoformat(), VALUE_FONT),
            ],
            CANVAS_HEIGHT,
        ),
    )


def freestyle_overlay(
    elapsed_seconds: int,
    workout_date: date,
    logo_aspect: float = DEFAULT_LOGO_ASPECT,
) -> OverlayLayout:
    """Overlay for a freestyle session photo: elapsed time and date."""
    minutes, seconds = divmod(max(elapsed_seconds, 0), 60)
    return OverlayLayout(
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        mirror=True,
        logo=corner_logo(CANVAS_WIDTH, CANVAS_HEIGHT, logo_aspect),
        texts=_stat_block(
            "Freestyle Workout 💪",
            [
                ("Duration", f"{minutes}:{seconds:02d}", VALUE_FONT),
                ("Date", f"{workout_date:%b} {workout_date.day}, {workout_date.year}", VALUE_FONT),
            ],
            CANVAS_HEIGHT,
        ),
        output_mime_type=PHOTO_MIME_TYPE,
    )


def before_photo_overlay(
    width: int,
    height: int,
    logo_aspect: float = DEFAULT_LOGO_ASPECT,
) -> OverlayLayout:
    """Watermark for the before photo: a faint centred logo, no stats."""
    logo_height = height * LOGO_HEIGHT_RATIO
    logo_width = logo_aspect * logo_height
    return OverlayLayout(
        width=width,
        height=height,
        mirror=False,
        logo=LogoPlacement(
            x=(width - logo_width) / 2,
            y=height * BEFORE_PHOTO_LOGO_Y_RATIO,
            width=logo_width,
            height=logo_height,
            alpha=BEFORE_PHOTO_LOGO_ALPHA,
        ),
        output_mime_type=PHOTO_MIME_TYPE,
    )
