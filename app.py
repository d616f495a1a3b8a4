import tkinter as tk

from config import settings
from logging_config import setup_logging
from repo_json import HabitRepo
from ui.analytics import Analytics
from ui.dashboard import Dashboard
from ui.habit_form import HabitForm


class App(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Habit Calendar")
        self.geometry("900x640")
        self.repo = HabitRepo.from_path(settings.data_path)

        container = tk.Frame(self)
        container.pack(fill="both", expand=True)
        container.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        self.frames = {}
        for F in (Dashboard, HabitForm, Analytics):
            frame = F(parent=container, controller=self)
            self.frames[F.__name__] = frame
            frame.grid(row=0, column=0, sticky="nsew")

        self.show("Dashboard")

    def show(self, name):
        frame = self.frames[name]
        if hasattr(frame, "refresh"):
            frame.refresh()
        frame.tkraise()

    def edit_habit(self, habit_id):
        """Open the habit form; None means a new habit."""
        self.frames["HabitForm"].load(habit_id)
        self.show("HabitForm")


def main():
    setup_logging()
    App().mainloop()


if __name__ == "__main__":
    main()
