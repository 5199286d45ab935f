"""Панель настройки: выбор режима и целевого размера.

Принципы:
- SRP: только виджеты; диапазоны и прижатие значений берутся из `selection_service`.
- ISP: наружу одно событие `on_process(mode, target_kb)`.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

import customtkinter as ctk

from filetailor.models.tailoring_model import Mode, SourceFile
from filetailor.services.selection_service import (
    available_modes,
    clamp_target_kb,
    default_mode,
    initial_target_kb,
    slider_is_fixed,
    slider_range_kb,
)

MODE_LABELS: Dict[Mode, str] = {Mode.COMPRESS: "Сжать", Mode.INFLATE: "Добить"}
MODE_HINTS: Dict[Mode, str] = {
    Mode.COMPRESS: "Сжимает изображение примерно до этого размера.",
    Mode.INFLATE: "Дополняет файл ровно до этого размера.",
}


class ConfigurePanel(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)

        self.on_process: Optional[Callable[[Mode, float], None]] = None

        self._file: Optional[SourceFile] = None
        self._mode: Mode = Mode.INFLATE
        self._target_kb: float = 0.0

        self.grid_columnconfigure(0, weight=1)

        self._title = ctk.CTkLabel(self, text="Действие", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, columnspan=2, padx=12, pady=(12, 4), sticky="w")

        self._mode_buttons = ctk.CTkSegmentedButton(
            self, values=[MODE_LABELS[Mode.INFLATE]], command=self._on_mode_click
        )
        self._mode_buttons.grid(row=1, column=0, columnspan=2, padx=12, pady=(0, 12), sticky="ew")

        self._target_title = ctk.CTkLabel(self, text="Целевой размер", font=ctk.CTkFont(size=16, weight="bold"))
        self._target_title.grid(row=2, column=0, columnspan=2, padx=12, pady=(8, 4), sticky="w")

        self._slider = ctk.CTkSlider(self, from_=0, to=1, command=self._on_slider_change)
        self._slider.grid(row=3, column=0, padx=(12, 6), pady=8, sticky="ew")

        self._kb_val = ctk.StringVar(value="")
        self._kb_entry = ctk.CTkEntry(self, textvariable=self._kb_val, width=96)
        self._kb_entry.grid(row=3, column=1, padx=(6, 12), pady=8, sticky="e")
        self._kb_entry.bind("<FocusOut>", self._on_kb_commit)
        self._kb_entry.bind("<Return>", self._on_kb_commit)

        self._mb_val = ctk.StringVar(value="")
        self._mb_label = ctk.CTkLabel(self, textvariable=self._mb_val, anchor="e")
        self._mb_label.grid(row=4, column=1, padx=(6, 12), pady=(0, 4), sticky="e")

        self._hint_val = ctk.StringVar(value="")
        self._hint_label = ctk.CTkLabel(self, textvariable=self._hint_val, anchor="w")
        self._hint_label.grid(row=4, column=0, padx=(12, 6), pady=(0, 4), sticky="w")

        self._process_btn = ctk.CTkButton(self, text="Обработать", command=self._emit_process)
        self._process_btn.grid(row=5, column=0, columnspan=2, padx=12, pady=(12, 12), sticky="ew")

        self.set_file(None)

    # public API
    def set_file(self, file: Optional[SourceFile]) -> None:
        """Перестраивает выбор режима под файл; `None` блокирует панель."""
        self._file = file
        if file is None:
            self._mode_buttons.configure(values=[MODE_LABELS[Mode.INFLATE]], state="disabled")
            self._slider.configure(state="disabled")
            self._kb_entry.configure(state="disabled")
            self._process_btn.configure(state="disabled")
            self._kb_val.set("")
            self._mb_val.set("")
            self._hint_val.set("Откройте файл, чтобы начать.")
            return

        modes = available_modes(file)
        self._mode_buttons.configure(values=[MODE_LABELS[m] for m in modes], state="normal")
        self._kb_entry.configure(state="normal")
        self._process_btn.configure(state="normal")
        self._apply_mode(default_mode(file))

    def set_busy(self, busy: bool) -> None:
        state = "disabled" if busy or self._file is None else "normal"
        self._process_btn.configure(state=state)
        self._mode_buttons.configure(state=state)
        self._slider.configure(state="disabled" if state == "normal" and self._slider_fixed() else state)
        self._kb_entry.configure(state=state)
        self._process_btn.configure(text="Обработка…" if busy else "Обработать")

    # events
    def _on_mode_click(self, value: str) -> None:
        for mode, label in MODE_LABELS.items():
            if label == value:
                self._apply_mode(mode)
                return

    def _on_slider_change(self, value: float) -> None:
        self._set_target_kb(round(value))

    def _on_kb_commit(self, _event=None) -> None:
        if self._file is None:
            return
        self._set_target_kb(clamp_target_kb(self._kb_val.get(), self._file.size, self._mode))

    def _emit_process(self) -> None:
        if self._file is None:
            return
        self._on_kb_commit()
        if self.on_process:
            self.on_process(self._mode, self._target_kb)

    # helpers
    def _apply_mode(self, mode: Mode) -> None:
        if self._file is None:
            return
        self._mode = mode
        self._mode_buttons.set(MODE_LABELS[mode])
        min_kb, max_kb = slider_range_kb(self._file.size, mode)
        if slider_is_fixed(self._file.size, mode):
            # CTkSlider needs from_ != to; the range is locked instead
            self._slider.configure(from_=min_kb, to=min_kb + 1, number_of_steps=1, state="disabled")
        else:
            self._slider.configure(from_=min_kb, to=max_kb, number_of_steps=max_kb - min_kb, state="normal")
        self._hint_val.set(MODE_HINTS[mode])
        self._set_target_kb(initial_target_kb(self._file.size, mode))

    def _set_target_kb(self, target_kb: float) -> None:
        self._target_kb = target_kb
        self._slider.set(target_kb)
        self._kb_val.set(str(round(target_kb)))
        self._mb_val.set(f"KB ({target_kb / 1024:.2f} MB)")

    def _slider_fixed(self) -> bool:
        return self._file is not None and slider_is_fixed(self._file.size, self._mode)
