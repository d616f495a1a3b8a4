"""Shared visual style helpers for the Tk UI (soft lilac calendar palette)."""

import tkinter as tk

# Palette
BG = "#f6f3fb"
CARD_BG = "#ffffff"
PANEL_BG = "#faf7ff"
BORDER = "#ddd3ee"
TEXT = "#2b2340"
MUTED = "#72688a"
ACCENT = "#7c4dcc"
ACCENT_DARK = "#5e35a8"
TODAY = "#f6ad55"
DANGER = "#d9534f"
FUTURE_BG = "#eeecf2"
FUTURE_FG = "#b3adc0"

# Completion ratio buckets for calendar days, highest first
RATIO_COLORS = [
    (1.0, "#9ae6b4"),    # every habit done
    (0.66, "#90cdf4"),
    (0.33, "#fbd38d"),
    (0.0, "#feb2b2"),
]

# Typography
FONT_FAMILY = "Helvetica"
TITLE = (FONT_FAMILY, 20, "bold")
SUBTITLE = (FONT_FAMILY, 12)
HEADING = (FONT_FAMILY, 13, "bold")
BODY = (FONT_FAMILY, 11)
SMALL = (FONT_FAMILY, 9)
BUTTON = (FONT_FAMILY, 10, "bold")


def ratio_color(ratio: float):
    """Background for a day cell, or None when nothing was completed."""
    if ratio <= 0:
        return None
    for threshold, color in RATIO_COLORS:
        if ratio >= threshold:
            return color
    return RATIO_COLORS[-1][1]


def card(parent, panel: bool = False, **kwargs):
    """Lightweight card frame with border."""
    return tk.Frame(
        parent,
        bg=PANEL_BG if panel else CARD_BG,
        bd=0,
        highlightbackground=BORDER,
        highlightthickness=1,
        **kwargs,
    )


def heading_label(parent, text, font=TITLE):
    return tk.Label(parent, text=text, bg=parent.cget("bg"), fg=TEXT, font=font)


def muted_label(parent, text, font=BODY, wrap=None):
    return tk.Label(
        parent,
        text=text,
        bg=parent.cget("bg"),
        fg=MUTED,
        font=font,
        justify="left",
        wraplength=wrap,
        anchor="w",
    )


def primary_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=ACCENT,
        fg="#ffffff",
        activebackground=ACCENT_DARK,
        activeforeground="#ffffff",
        relief="flat",
        bd=0,
        font=BUTTON,
        padx=14,
        pady=8,
        cursor="hand2",
        highlightthickness=0,
    )


def ghost_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=CARD_BG,
        fg=ACCENT,
        activebackground=PANEL_BG,
        activeforeground=ACCENT_DARK,
        relief="solid",
        bd=1,
        font=BUTTON,
        padx=12,
        pady=7,
        cursor="hand2",
    )


def swatch(parent, color, size=12):
    """Small colored square marking a habit."""
    return tk.Frame(parent, bg=color, width=size, height=size)


def pill(parent, text, fg=ACCENT, bg=PANEL_BG):
    """Small tag-style label."""
    return tk.Label(
        parent,
        text=text,
        bg=bg,
        fg=fg,
        font=(FONT_FAMILY, 9, "bold"),
        padx=8,
        pady=2,
    )
