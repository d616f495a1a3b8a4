import tkinter as tk
from datetime import date

from calendar_grid import month_title
from microservice_clients import stats_overview
from ui import theme


class Analytics(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        header = theme.card(self)
        header.pack(fill="x", padx=16, pady=(14, 10))
        head_row = tk.Frame(header, bg=theme.CARD_BG)
        head_row.pack(fill="x", padx=14, pady=12)
        theme.heading_label(head_row, "Analytics", theme.TITLE).pack(anchor="w")
        theme.muted_label(
            head_row,
            "Streaks and consistency computed by the stats microservice.",
            wrap=740,
        ).pack(anchor="w", pady=(4, 0))

        buttons = tk.Frame(header, bg=theme.CARD_BG)
        buttons.pack(fill="x", padx=14, pady=(6, 6))
        theme.primary_button(buttons, "Refresh", self.refresh).pack(side="left")
        theme.ghost_button(
            buttons, "Back to Calendar", lambda: controller.show("Dashboard")
        ).pack(side="left", padx=8)

        self.overall_var = self._section("This Month")
        self.habits_var = self._section("Per Habit")

    def _section(self, title: str):
        frame = theme.card(self)
        frame.pack(fill="x", padx=16, pady=8)
        tk.Label(
            frame, text=title, font=theme.HEADING, bg=theme.CARD_BG, fg=theme.TEXT
        ).pack(anchor="w", padx=12, pady=(10, 0))
        var = tk.StringVar()
        tk.Label(
            frame,
            textvariable=var,
            anchor="w",
            justify="left",
            wraplength=780,
            bg=theme.CARD_BG,
            fg=theme.TEXT,
            font=theme.BODY,
        ).pack(fill="x", padx=12, pady=8)
        return var

    def refresh(self):
        today = date.today()
        repo = self.controller.repo
        result, error = stats_overview(repo, today.year, today.month, today)
        if error:
            self.overall_var.set(f"Stats service unavailable: {error}")
            self.habits_var.set("")
            return
        self.overall_var.set(self._render_overall(result, month_title(today.year, today.month)))
        self.habits_var.set(self._render_habits(result, repo.list_habits()))

    # ---------- Render helpers ----------
    def _render_overall(self, result: dict, title: str) -> str:
        overall = result.get("overall") or {}
        return (
            f"{title}: average consistency {overall.get('avg_consistency', 0)}%\n"
            f"All-time completions: {overall.get('total_completions', 0)}"
        )

    def _render_habits(self, result: dict, habits) -> str:
        rows = result.get("habits") or []
        if not rows:
            return "No habits yet."
        names = {h.id: h.name for h in habits}
        lines = []
        for row in rows:
            name = names.get(row["habit_id"], row["habit_id"])
            lines.append(
                f"{name}: current {row['current_streak']}, best {row['best_streak']}, "
                f"consistency {row['consistency']}%"
            )
        return "\n".join(lines)
