# ui/dashboard.py (calendar + habits + stats screen)
import tkinter as tk
import tkinter.messagebox as mbox
from datetime import date

from calendar_grid import WEEKDAY_HEADERS, DayCell, month_title, shift_month, weeks
from models import HabitError
from ui import theme


class Dashboard(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        today = date.today()
        self.year, self.month = today.year, today.month
        self.selected_day = None
        self.day_vars = []

        # Header
        header = tk.Frame(self, bg=theme.BG)
        header.pack(fill="x", padx=16, pady=(14, 6))
        theme.heading_label(header, "Habit Calendar", theme.TITLE).pack(side="left")
        theme.ghost_button(header, "Analytics", lambda: controller.show("Analytics")).pack(
            side="right", padx=(8, 0)
        )
        theme.primary_button(header, "Add Habit", lambda: controller.edit_habit(None)).pack(
            side="right"
        )

        body = tk.Frame(self, bg=theme.BG)
        body.pack(fill="both", expand=True, padx=16, pady=(0, 14))

        left = tk.Frame(body, bg=theme.BG)
        left.pack(side="left", fill="both", expand=True)
        right = tk.Frame(body, bg=theme.BG, width=280)
        right.pack(side="right", fill="y", padx=(12, 0))

        # Calendar card
        cal_card = theme.card(left)
        cal_card.pack(fill="x")
        nav = tk.Frame(cal_card, bg=theme.CARD_BG)
        nav.pack(fill="x", padx=12, pady=(10, 4))
        theme.ghost_button(nav, "<", lambda: self._move_month(-1)).pack(side="left")
        self.title_var = tk.StringVar()
        tk.Label(
            nav, textvariable=self.title_var, font=theme.HEADING,
            bg=theme.CARD_BG, fg=theme.TEXT,
        ).pack(side="left", expand=True)
        theme.ghost_button(nav, ">", lambda: self._move_month(1)).pack(side="right")

        self.grid_frame = tk.Frame(cal_card, bg=theme.CARD_BG)
        self.grid_frame.pack(padx=12, pady=(0, 12))

        # Selected day detail
        self.day_card = theme.card(left, panel=True)
        self.day_card.pack(fill="x", pady=(10, 0))

        # Habits + stats
        self.habits_card = theme.card(right)
        self.habits_card.pack(fill="x")
        self.stats_card = theme.card(right, panel=True)
        self.stats_card.pack(fill="x", pady=(10, 0))

    # ---------- Refresh ----------
    def refresh(self):
        self._render_calendar()
        self._render_day_panel()
        self._render_habits()
        self._render_stats()

    def _move_month(self, delta: int):
        self.year, self.month = shift_month(self.year, self.month, delta)
        self.selected_day = None
        self.refresh()

    def _render_calendar(self):
        for w in self.grid_frame.winfo_children():
            w.destroy()
        self.title_var.set(month_title(self.year, self.month))

        for col, name in enumerate(WEEKDAY_HEADERS):
            tk.Label(
                self.grid_frame, text=name, font=theme.SMALL, width=5,
                bg=theme.CARD_BG, fg=theme.MUTED,
            ).grid(row=0, column=col, pady=(0, 4))

        cells = self.controller.repo.calendar(self.year, self.month)
        for row, week in enumerate(weeks(cells), start=1):
            for col, cell in enumerate(week):
                if not isinstance(cell, DayCell):
                    continue
                self._day_button(cell).grid(row=row, column=col, padx=2, pady=2)

    def _day_button(self, cell: DayCell):
        if cell.is_future:
            bg, fg = theme.FUTURE_BG, theme.FUTURE_FG
        else:
            bg, fg = theme.ratio_color(cell.completion_ratio) or theme.CARD_BG, theme.TEXT
        btn = tk.Button(
            self.grid_frame,
            text=str(cell.day.day),
            width=4,
            font=theme.BODY,
            bg=bg,
            fg=fg,
            relief="solid" if cell.day == self.selected_day else "flat",
            bd=1,
            highlightthickness=2 if cell.is_today else 0,
            highlightbackground=theme.TODAY,
            cursor="hand2" if cell.clickable else "arrow",
            state="normal" if cell.clickable else "disabled",
        )
        btn["command"] = lambda d=cell.day: self._select_day(d)
        return btn

    def _select_day(self, day: date):
        self.selected_day = day
        self.refresh()

    # ---------- Day panel ----------
    def _render_day_panel(self):
        for w in self.day_card.winfo_children():
            w.destroy()
        self.day_vars.clear()
        repo = self.controller.repo
        habits = repo.list_habits()

        if not habits:
            theme.muted_label(
                self.day_card, "Add your first habit to start tracking!", wrap=460
            ).pack(anchor="w", padx=12, pady=12)
            return
        if self.selected_day is None:
            theme.muted_label(
                self.day_card, "Pick a day to mark completed habits.", wrap=460
            ).pack(anchor="w", padx=12, pady=12)
            return

        theme.heading_label(
            self.day_card, self.selected_day.strftime("%A, %B %d, %Y"), theme.HEADING
        ).pack(anchor="w", padx=12, pady=(10, 4))
        done = {h.id for h in repo.completed_habits(self.selected_day)}
        for habit in habits:
            row = tk.Frame(self.day_card, bg=theme.PANEL_BG)
            row.pack(fill="x", padx=12, pady=2)
            var = tk.BooleanVar(value=habit.id in done)
            self.day_vars.append(var)
            tk.Checkbutton(
                row,
                text=habit.name,
                variable=var,
                bg=theme.PANEL_BG,
                fg=theme.TEXT,
                font=theme.BODY,
                activebackground=theme.PANEL_BG,
                command=lambda hid=habit.id: self._toggle(hid),
            ).pack(side="left")
            theme.swatch(row, habit.color).pack(side="right", padx=4)
        tk.Frame(self.day_card, bg=theme.PANEL_BG, height=8).pack()

    def _toggle(self, habit_id: str):
        try:
            self.controller.repo.toggle_completion(self.selected_day, habit_id)
        except HabitError as exc:
            mbox.showerror("Cannot update", str(exc))
        self.refresh()

    # ---------- Habit list ----------
    def _render_habits(self):
        for w in self.habits_card.winfo_children():
            w.destroy()
        theme.heading_label(self.habits_card, "My Habits", theme.HEADING).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        habits = self.controller.repo.list_habits()
        if not habits:
            theme.muted_label(self.habits_card, "No habits yet.", wrap=250).pack(
                anchor="w", padx=12, pady=(0, 12)
            )
            return

        for habit in habits:
            row = tk.Frame(self.habits_card, bg=theme.CARD_BG)
            row.pack(fill="x", padx=12, pady=4)
            theme.swatch(row, habit.color).pack(side="left", padx=(0, 8))
            text = tk.Frame(row, bg=theme.CARD_BG)
            text.pack(side="left", fill="x", expand=True)
            tk.Label(
                text, text=habit.name, font=theme.BODY, bg=theme.CARD_BG,
                fg=theme.TEXT, anchor="w",
            ).pack(anchor="w")
            if habit.description:
                theme.muted_label(text, habit.description, font=theme.SMALL, wrap=160).pack(
                    anchor="w"
                )
            theme.pill(text, habit.frequency.capitalize()).pack(anchor="w", pady=(2, 0))
            tk.Button(
                row, text="Delete", font=theme.SMALL, bg=theme.DANGER, fg="#ffffff",
                relief="flat", bd=0, cursor="hand2",
                command=lambda h=habit: self._delete_habit(h),
            ).pack(side="right", padx=2)
            tk.Button(
                row, text="Edit", font=theme.SMALL, relief="flat", bd=0, cursor="hand2",
                command=lambda hid=habit.id: self.controller.edit_habit(hid),
            ).pack(side="right", padx=2)
        tk.Frame(self.habits_card, bg=theme.CARD_BG, height=8).pack()

    def _delete_habit(self, habit):
        if not mbox.askyesno(
            "Delete habit?",
            f'Are you sure you want to delete "{habit.name}"?\n'
            "Every completion recorded for it is removed too.",
        ):
            return
        self.controller.repo.delete_habit(habit.id)
        self.refresh()

    # ---------- Stats ----------
    def _render_stats(self):
        for w in self.stats_card.winfo_children():
            w.destroy()
        theme.heading_label(self.stats_card, "Statistics", theme.HEADING).pack(
            anchor="w", padx=12, pady=(10, 4)
        )
        repo = self.controller.repo
        habits = repo.list_habits()
        if not habits:
            theme.muted_label(self.stats_card, "Add habits to see statistics.", wrap=250).pack(
                anchor="w", padx=12, pady=(0, 12)
            )
            return

        stats = repo.statistics(self.year, self.month)
        overall = stats["overall"]
        theme.muted_label(
            self.stats_card,
            f"Total completions: {overall['total_completions']}\n"
            f"Avg. consistency: {overall['avg_consistency']}%",
        ).pack(anchor="w", padx=12)

        names = {h.id: h.name for h in habits}
        for row in stats["habits"]:
            theme.muted_label(
                self.stats_card,
                f"{names[row['habit_id']]}: streak {row['current_streak']}, "
                f"best {row['best_streak']}, {row['consistency']}% this month",
                font=theme.SMALL,
                wrap=250,
            ).pack(anchor="w", padx=12, pady=1)
        tk.Frame(self.stats_card, bg=theme.PANEL_BG, height=8).pack()
