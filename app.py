# app.py
# CustomTkinter GUI for live Singlish -> Sinhala typing (dark theme).
# - Rule table / dictionaries loaded in a background thread (keeps UI responsive).
# - Optional custom data folder.
# - Live conversion with debounce through one incremental Session; event log pane.

from __future__ import annotations
import threading
from typing import Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

from singlish.engine import Engine
from singlish.models import Diagnostic
from singlish.session import Session


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def fmt_diagnostic(d: Diagnostic) -> str:
    return f"{d.kind}: {d.fragment!r} at {d.position}"


# -------------------- main app --------------------

class TransliteratorApp(ctk.CTk):
    """Dark-themed GUI that converts Singlish to Sinhala while the user types."""

    def __init__(self) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("Singlish → Sinhala")
        self.geometry("900x650")
        self.minsize(820, 560)

        # State
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None
        self._loading_thread: Optional[threading.Thread] = None
        self._update_after_id: Optional[str] = None
        self._current_source_label: str = "Built-in rule table"

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_text = ctk.CTkFont(family="Noto Sans Sinhala, Iskoola Pota, Segoe UI", size=16)

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)  # input
        self.grid_rowconfigure(3, weight=1)  # output
        self.grid_rowconfigure(4, weight=1)  # log

        # Build UI
        self._build_header()
        self._build_source_bar()
        self._build_input()
        self._build_output()
        self._build_log()

        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._start_loading(data_dir=None)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        title = ctk.CTkLabel(header, text="Singlish → Sinhala", font=self.font_title)
        title.grid(row=0, column=0, sticky="w", padx=12, pady=10)

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(1, weight=1)

        btn_folder = ctk.CTkButton(bar, text="Choose Data Folder", command=self._choose_folder)
        btn_folder.grid(row=0, column=0, padx=(12, 6), pady=10)

        self.lbl_source = ctk.CTkLabel(bar, text=self._current_source_label, anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=1, sticky="ew", padx=(6, 6), pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=2, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=3, sticky="e", padx=12, pady=10)

    def _build_input(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="nsew", padx=12, pady=(6, 6))
        box.grid_columnconfigure(0, weight=1)
        box.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Input your Singlish text here:", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        self.txt_input = ctk.CTkTextbox(box, wrap="word", font=self.font_text)
        self.txt_input.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_input.bind("<KeyRelease>", self._on_input_changed)

    def _build_output(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=(6, 6))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Sinhala", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        self.txt_output = ctk.CTkTextbox(frame, wrap="word", font=self.font_text)
        self.txt_output.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_output.configure(state="disabled")

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        self.txt_log = ctk.CTkTextbox(frame, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._log("GUI ready. Loading the built-in rule table…")

    # --------- source selection ---------

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose a folder with vowels.tsv, consonants.tsv, …")
        if not path:
            return
        self._start_loading(data_dir=path)

    # --------- loading pipeline (threaded) ---------

    def _start_loading(self, data_dir: Optional[str]) -> None:
        # prevent re-entrancy
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "Tables are already loading. Please wait.")
            return

        self._current_source_label = f"Folder: {shorten_path(data_dir)}" if data_dir else "Built-in rule table"
        self.lbl_source.configure(text=self._current_source_label)
        self._set_status("Loading…")
        self.progress.start()
        self._session = None

        self._loading_thread = threading.Thread(target=self._load_worker, args=(data_dir,), daemon=True)
        self._loading_thread.start()

    def _load_worker(self, data_dir: Optional[str]) -> None:
        try:
            engine = Engine().build(data_dir, fresh=data_dir is not None)
        except (OSError, ValueError) as exc:
            self.after(0, self._on_load_error, exc)
            return
        self.after(0, self._on_load_ok, engine)

    def _on_load_ok(self, engine: Engine) -> None:
        self.progress.stop()
        if self._engine is not None:
            self._engine.shutdown()
        self._engine = engine
        self._session = engine.new_session()
        assert engine.tables is not None
        n_rules, n_words = len(engine.tables.rules), len(engine.tables.lexicon)
        self._set_status(f"{n_rules:,} rules, {n_words:,} dictionary words.")
        self._log(f"Tables ready from {engine.tables.data_dir}.")
        self.txt_input.focus_set()
        self._do_update()

    def _on_load_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while loading tables.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Load error", "Failed to load the rule table.\nSee event log for details.")

    # --------- live conversion ---------

    def _on_input_changed(self, _ev=None) -> None:
        # debounce for smoother typing
        if self._update_after_id is not None:
            self.after_cancel(self._update_after_id)
        self._update_after_id = self.after(160, self._do_update)

    def _do_update(self) -> None:
        self._update_after_id = None
        if self._session is None:
            return
        text = self.txt_input.get("1.0", "end-1c")
        output = self._session.update(text)
        self._set_output(output)
        for d in self._session.fresh_diagnostics:
            self._log(fmt_diagnostic(d))

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_output(self, text: str) -> None:
        self.txt_output.configure(state="normal")
        self.txt_output.delete("0.0", "end")
        if text:
            self.txt_output.insert("end", text)
        self.txt_output.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        if self._engine is not None:
            self._engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    app = TransliteratorApp()
    app.mainloop()
