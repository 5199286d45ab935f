from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from filetailor.services.selection_service import describe_size_change
from filetailor.utils.formatting import format_bytes, format_bytes_simple


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_save: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        self._status_val = ctk.StringVar(value="Откройте файл, чтобы начать.")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_val, anchor="w", justify="left")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=(8, 0), sticky="ew")

        self._summary_val = ctk.StringVar(value="")
        self._summary_label = ctk.CTkLabel(self, textvariable=self._summary_val, anchor="w", justify="left")
        self._summary_label.grid(row=1, column=0, padx=(10, 6), pady=(0, 8), sticky="ew")

        self._save_btn = ctk.CTkButton(self, text="Сохранить…", command=self._emit_save)
        self._save_btn.grid(row=0, column=1, rowspan=2, padx=6, pady=8, sticky="e")

        self._reset_btn = ctk.CTkButton(
            self, text="Обработать другой файл", fg_color="transparent", border_width=1, command=self._emit_reset
        )
        self._reset_btn.grid(row=0, column=2, rowspan=2, padx=(6, 10), pady=8, sticky="e")

        self._toggle_result_controls(visible=False)

    # public API (sync from controller)
    def show_idle(self) -> None:
        self._status_val.set("Откройте файл, чтобы начать.")
        self._summary_val.set("")
        self._status_label.configure(text_color=("gray10", "gray90"))
        self._toggle_result_controls(visible=False)

    def show_configure(self) -> None:
        self._status_val.set("Выберите действие и целевой размер.")
        self._summary_val.set("")
        self._status_label.configure(text_color=("gray10", "gray90"))
        self._toggle_result_controls(visible=False)

    def show_processing(self) -> None:
        self._status_val.set("Обработка…")
        self._status_label.configure(text_color=("gray10", "gray90"))
        self._summary_val.set("")
        self._toggle_result_controls(visible=False)

    def show_success(self, original_size: int, new_size: int) -> None:
        self._status_val.set("Готово! Файл можно сохранить.")
        self._status_label.configure(text_color=("green4", "palegreen"))
        summary = f"Было: {format_bytes(original_size)}   Стало: {format_bytes(new_size)}"
        change = describe_size_change(original_size, new_size)
        if change.is_reduction:
            summary += f"   Уменьшение: {format_bytes_simple(change.delta_bytes)} ({change.percent}%)"
        elif change.is_increase:
            summary += f"   Увеличение: {format_bytes_simple(-change.delta_bytes)}"
        self._summary_val.set(summary)
        self._toggle_result_controls(visible=True)

    def show_error(self, message: str) -> None:
        self._status_val.set(f"Ошибка: {message}")
        self._status_label.configure(text_color=("red3", "tomato"))
        self._summary_val.set("")
        self._save_btn.grid_remove()
        self._reset_btn.configure(text="Попробовать снова")
        self._reset_btn.grid(row=0, column=2, rowspan=2, padx=(6, 10), pady=8, sticky="e")

    # events
    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _emit_reset(self) -> None:
        if self.on_reset:
            self.on_reset()

    # helpers
    def _toggle_result_controls(self, visible: bool) -> None:
        if visible:
            self._reset_btn.configure(text="Обработать другой файл")
            self._save_btn.grid(row=0, column=1, rowspan=2, padx=6, pady=8, sticky="e")
            self._reset_btn.grid(row=0, column=2, rowspan=2, padx=(6, 10), pady=8, sticky="e")
        else:
            self._save_btn.grid_remove()
            self._reset_btn.grid_remove()
