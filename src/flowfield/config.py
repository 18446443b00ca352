from dataclasses import dataclass, field

from .utils import hex_to_rgb


@dataclass
class AppConfig:
    # --- Debugging ---
    debug: bool = False  # Show FPS / timing overlay

    # --- Logging ---
    log_level: str = "INFO"  # Minimum log level to output
    log_file: str | None = None  # Redirect logs to a file instead of the console
    log_interval: float = 5.0  # Seconds between FPS / frame-time log lines

    # --- Window and Rendering ---
    title: str = "Flow Field"  # Window title
    width: int = 1280  # Initial window width (screen coordinates)
    height: int = 720  # Initial window height (screen coordinates)
    fullscreen: bool = False  # Open on the primary monitor at its native size
    vsync: bool = True  # Pace frames to the display refresh (swap interval 1)
    samples: int = 4  # MSAA samples requested for the default framebuffer

    # --- Palette (0xRRGGBB) ---
    color1: int = 0x0B0C10  # Dark background
    color2: int = 0x00444F  # Deep teal
    color3: int = 0x45F3FF  # Electric blue
    color4: int = 0x66FF00  # Green

    # --- Text overlay ---
    font_path: str = "fonts/FiraCode-SemiBold.ttf"  # TTF used for all overlay text
    font_size: int = 32  # Headline pixel size
    headline: tuple[str, ...] = field(
        default_factory=lambda: ("Energy in motion.", "Shaped by noise.")
    )
    nav: str = "Work    About    Contact"  # Navigation line drawn near the top

    # --- Entrance animation ---
    entrance: bool = True  # Play the reveal tweens once the first frame is drawn
    container_fade: float = 2.0  # Seconds for the surface to fade in
    text_offset: float = 50.0  # Pixels each headline line slides up from
    text_duration: float = 1.2  # Seconds per headline line
    text_stagger: float = 0.2  # Seconds between consecutive headline lines
    text_delay: float = 0.5  # Seconds before the first headline line starts
    nav_offset: float = -50.0  # Pixels the nav line slides down from
    nav_duration: float = 1.0  # Seconds for the nav line
    nav_delay: float = 1.0  # Seconds before the nav line starts

    def palette(self) -> tuple[tuple[float, float, float], ...]:
        """The four color stops as RGB triples in [0, 1]."""
        return tuple(
            hex_to_rgb(c) for c in (self.color1, self.color2, self.color3, self.color4)
        )
