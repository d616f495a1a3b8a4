# ui/habit_form.py
import tkinter as tk

from models import DESCRIPTION_MAX, FREQUENCIES, NAME_MAX, PRESET_COLORS, ValidationError
from ui import theme


class HabitForm(tk.Frame):
    """Create a new habit, or edit one when opened with a habit id."""

    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.habit_id = None

        wrapper = theme.card(self)
        wrapper.pack(fill="x", padx=16, pady=18)

        header = tk.Frame(wrapper, bg=theme.CARD_BG)
        header.pack(fill="x", padx=14, pady=(12, 2))
        self.title = theme.heading_label(header, "New Habit", theme.TITLE)
        self.title.pack(anchor="w")

        form = tk.Frame(wrapper, bg=theme.CARD_BG)
        form.pack(padx=14, pady=10, fill="x")
        form.columnconfigure(1, weight=1)

        self._label(form, "Name", 0)
        self.name = tk.Entry(form, font=theme.BODY, relief="solid", bd=1)
        self.name.grid(row=0, column=1, sticky="ew", padx=8, pady=4)
        self.name_error = tk.Label(
            form, text="", fg=theme.DANGER, bg=theme.CARD_BG, font=theme.SMALL
        )
        self.name_error.grid(row=1, column=1, sticky="w", padx=8)

        self._label(form, "Description", 2)
        self.description = tk.Entry(form, font=theme.BODY, relief="solid", bd=1)
        self.description.grid(row=2, column=1, sticky="ew", padx=8, pady=4)

        self._label(form, "Frequency", 3)
        self.frequency = tk.StringVar(value=FREQUENCIES[0])
        freq_row = tk.Frame(form, bg=theme.CARD_BG)
        freq_row.grid(row=3, column=1, sticky="w", padx=8, pady=4)
        for value in FREQUENCIES:
            tk.Radiobutton(
                freq_row, text=value.capitalize(), value=value, variable=self.frequency,
                bg=theme.CARD_BG, font=theme.BODY, activebackground=theme.CARD_BG,
            ).pack(side="left", padx=(0, 10))

        self._label(form, "Color", 4)
        self.color = tk.StringVar(value=PRESET_COLORS[0])
        color_row = tk.Frame(form, bg=theme.CARD_BG)
        color_row.grid(row=4, column=1, sticky="w", padx=8, pady=4)
        for value in PRESET_COLORS:
            tk.Radiobutton(
                color_row, value=value, variable=self.color, indicatoron=False,
                width=2, bg=value, selectcolor=value, activebackground=value,
                relief="flat", offrelief="flat", bd=3,
            ).pack(side="left", padx=2)

        theme.muted_label(
            wrapper,
            f"Name: 2-{NAME_MAX} characters. Description: up to {DESCRIPTION_MAX}.",
            wrap=520,
        ).pack(anchor="w", padx=14, pady=(0, 10))

        controls = tk.Frame(wrapper, bg=theme.CARD_BG)
        controls.pack(fill="x", padx=14, pady=(0, 14))
        self.save_btn = theme.primary_button(controls, "Create Habit", self.save)
        self.save_btn.pack(side="left")
        theme.ghost_button(controls, "Cancel", lambda: controller.show("Dashboard")).pack(
            side="left", padx=8
        )

        self.name.bind("<Return>", lambda _e: self.save())

    def _label(self, form, text, row):
        tk.Label(
            form, text=text, bg=theme.CARD_BG, fg=theme.TEXT, font=theme.BODY
        ).grid(row=row, column=0, sticky="w", pady=4)

    def load(self, habit_id=None):
        """Reset the form, pre-filled from an existing habit when editing."""
        self.habit_id = habit_id
        self.name_error.configure(text="")
        self.name.delete(0, "end")
        self.description.delete(0, "end")
        if habit_id is None:
            self.title.configure(text="New Habit")
            self.save_btn.configure(text="Create Habit")
            self.frequency.set(FREQUENCIES[0])
            self.color.set(PRESET_COLORS[0])
            return
        habit = self.controller.repo.get_habit(habit_id)
        self.title.configure(text="Edit Habit")
        self.save_btn.configure(text="Save Changes")
        self.name.insert(0, habit.name)
        self.description.insert(0, habit.description)
        self.frequency.set(habit.frequency)
        self.color.set(habit.color)

    def save(self):
        data = {
            "name": self.name.get(),
            "description": self.description.get(),
            "frequency": self.frequency.get(),
            "color": self.color.get(),
        }
        repo = self.controller.repo
        try:
            if self.habit_id is None:
                repo.create_habit(data)
            else:
                repo.update_habit(self.habit_id, data)
        except ValidationError as exc:
            self.name_error.configure(text=f"{exc.field}: {exc.message}")
            return
        self.controller.show("Dashboard")
