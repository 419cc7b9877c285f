"""
Old-Fangled Future - the bundled demo sequence.

Seven scenes, 22.2 seconds at speed 1.0. Visuals are deliberately
simple block shapes; the interesting part is the timing of subtitles and
narration.
"""

from __future__ import annotations

import math

from animatic.runtime.stage import Stage
from animatic.scenes.builder import SceneBuilder
from animatic.scenes.registry import SceneRegistry


COLORS = {
    "bg1831": "#2f2a25",
    "ground1831": "#3b352e",
    "smoke": "#69635c",
    "flash": "#ffffff",
    "street": "#0a0f18",
    "neon_blue": "#3bdcff",
    "neon_pink": "#ff4fb0",
    "black": "#000000",
    "panel": "#111317",
    "pedestal": "#d9dfe7",
    "computer": "#9aa3ad",
    "store": "#131722",
    "bubble": "#f6f7fb",
    "hero": "#22e3c7",
    "seller": "#ff55aa",
}


# Figures

def draw_character(stage: Stage, cx: float, cy: float, scale: float = 1.0, color: str = COLORS["hero"]) -> None:
    """Blocky stand-in for the stick figure: head, body, legs."""
    canvas = stage.canvas
    canvas.fill_circle(cx, cy - 30 * scale, 16 * scale, color)
    canvas.fill_rect(cx - 2 * scale, cy - 14 * scale, 4 * scale, 54 * scale, color)
    canvas.fill_rect(cx - 28 * scale, cy - 2 * scale, 56 * scale, 4 * scale, color)
    canvas.fill_rect(cx - 22 * scale, cy + 40 * scale, 4 * scale, 40 * scale, color)
    canvas.fill_rect(cx + 18 * scale, cy + 40 * scale, 4 * scale, 40 * scale, color)


def draw_store(stage: Stage, x: float, y: float, w: float, h: float, neon: str) -> None:
    stage.canvas.fill_rect(x - 3, y - 3, w + 6, h + 6, neon)
    stage.canvas.fill_rect(x, y, w, h, COLORS["store"])


def draw_bubble(stage: Stage, x: float, y: float, w: float, h: float) -> None:
    stage.canvas.fill_rect(x, y, w, h, COLORS["bubble"])


# Scenes

def draw_civil_war(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["bg1831"])
    canvas.fill_rect(0, 420, canvas.width, 120, COLORS["ground1831"])

    for i in range(6):
        x = 80 + i * 140
        y = 260 + math.sin(t * 2 + i) * 8
        canvas.fill_circle(x, y, 22 + (i % 3) * 8, COLORS["smoke"])

    bob = math.sin(t * 4) * 2
    draw_character(stage, 480, 340 + bob)


def draw_teleport(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill_rect(0, 0, canvas.width, canvas.height, COLORS["flash"], alpha=max(0.0, 1 - t))

    rings = (
        (120 * (0.8 + 0.2 * math.sin(t * 6)), COLORS["flash"]),
        (80 * (0.8 + 0.2 * math.cos(t * 7)), COLORS["neon_blue"]),
        (50 * (0.8 + 0.2 * math.sin(t * 8)), COLORS["neon_pink"]),
    )
    for radius, color in rings:
        canvas.fill_circle(480, 300, radius, color)

    # Character dissolves
    if 1 - t * 0.8 > 0:
        draw_character(stage, 480, 340)


def draw_street(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["street"])
    draw_store(stage, 120, 220, 220, 240, COLORS["neon_blue"])
    draw_store(stage, 420, 220, 220, 240, COLORS["neon_pink"])
    draw_store(stage, 720, 220, 180, 200, COLORS["neon_blue"])

    walk_x = 60 + t * 60
    draw_character(stage, 80 + walk_x, 380)


def draw_old_fangled_shop(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["panel"])
    canvas.fill_rect(380, 300, 200, 100, COLORS["pedestal"])
    draw_store(stage, 140, 280, 160, 120, COLORS["neon_pink"])

    draw_character(stage, 300, 360)
    draw_character(stage, 720, 360, 0.9, COLORS["seller"])

    draw_bubble(stage, 220, 220, 300, 52)
    draw_bubble(stage, 620, 220, 240, 52)

    shake = math.sin(t * 16) * 2
    canvas.fill_rect(160 + shake, 100, 420, 24, COLORS["neon_pink"])


def draw_nasa_street(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["street"])
    draw_store(stage, 140, 220, 260, 240, COLORS["neon_pink"])
    draw_store(stage, 520, 240, 220, 200, COLORS["neon_blue"])

    walk_x = min(380, t * 140 + 60)
    draw_character(stage, 80 + walk_x, 380)


def draw_nasa_shop(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["panel"])
    canvas.fill_rect(280, 220, 420, 220, COLORS["computer"])
    draw_character(stage, 680, 380, 0.95, COLORS["seller"])

    # Faint: the hero sinks once the second price lands
    drop = min(40.0, (t - 3.8) * 48) if t > 3.8 else 0.0
    draw_character(stage, 340, 400 + drop, 1.05)

    draw_bubble(stage, 80, 120, 800, 50)
    draw_bubble(stage, 80, 180, 800, 50)
    draw_bubble(stage, 80, 240, 800, 70)

    if t > 4.8:
        stage.subtitles.set("Thud.")


def draw_end_card(stage: Stage, t: float) -> None:
    canvas = stage.canvas
    canvas.fill(COLORS["black"])
    canvas.fill_rect(canvas.width / 2 - 200, canvas.height / 2 - 40, 400, 36, COLORS["neon_blue"])
    canvas.fill_rect(canvas.width / 2 - 140, canvas.height / 2 + 12, 280, 24, COLORS["neon_pink"])


def old_fangled_future() -> SceneRegistry:
    """Build the demo sequence."""
    return (
        SceneBuilder()
        .scene("1831 Civil War", 3.0, draw=draw_civil_war)
        .subtitle("Year: 1831 - Civil War")
        .narrate("The year is 1831. The civil war rages. One man stands in the middle.")

        .scene("Teleport", 1.6, draw=draw_teleport)
        .subtitle("")
        .narrate("I'm going to 2030.", rate=1.1)

        .scene("2030 Street - Old-Fangled Things", 3.2, draw=draw_street)
        .subtitle("2030 - Downtown")
        .narrate("He lands on a futuristic street, beside a store called Old-Fangled Things.")

        .scene("Inside Old-Fangled Things", 4.2, draw=draw_old_fangled_shop)
        .subtitle("iPhone 67")
        .narrate("How much do this cost, bucko?", rate=1.05)
        .cue(1.2, "Fifty-nine thousand, eight hundred thirty-two dollars.")
        .cue(2.4, "WHATTHE?! HOW IS THIS POSSIBLE? You people are so rich!")
        .cue(3.6, "That's normal price for a dirt piece.")

        .scene("Back to street - NASA Computers 67", 2.8, draw=draw_nasa_street)
        .subtitle("NASA Computers 67")
        .narrate("He heads to NASA Computers 67.")

        .scene("Inside NASA shop - absurd pricing", 5.4, draw=draw_nasa_shop)
        .subtitle("6767667676766776nasa")
        .narrate("How much?")
        .cue(
            0.8,
            "Ninety-nine trillion, nine hundred ninety-nine billion, zero ninety-nine million, "
            "seven hundred ninety-nine billion, eight hundred eighty-seven million, eight hundred "
            "seventy-eight thousand, seven hundred eighty-nine, seven hundred nine dollars, "
            "if you are not subbed to Cetus P-two-n.",
            rate=0.95,
        )
        .cue(3.2, "How much without?")
        .cue(
            4.0,
            "Seventy-five nonillion, eight hundred forty-seven octillion, five hundred forty-three "
            "septillion, seven hundred fifty-nine sextillion, eight hundred forty-seven quintillion, "
            "and so on.",
            rate=0.95,
        )
        .cue(5.2, "He faints.")

        .scene("End card", 2.0, draw=draw_end_card)
        .subtitle("Old-Fangled Future - Subscribe to Cetus-P2n?")
        .narrate("Old-Fangled Future. Subscribe to Cetus P-two-n?")

        .build()
    )
