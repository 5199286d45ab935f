"""Боковая панель: открытие файла и информация о нём.

Принципы:
- SRP: управляет только UI, не содержит логики подгонки.
- ISP: события наружу через `on_*`, состояние внутрь через `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from filetailor.models.tailoring_model import SourceFile
from filetailor.utils.formatting import format_bytes


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файл, информация."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_remove_file: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть файл…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._name_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._type_val = ctk.StringVar(value="—")

        self._info_name = ctk.CTkLabel(self, textvariable=self._name_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_type = ctk.CTkLabel(self, textvariable=self._type_val, anchor="w", justify="left")

        self._info_name.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_type.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        self._remove_btn = ctk.CTkButton(
            self, text="Убрать файл", fg_color="transparent", border_width=1, command=self._emit_remove_file
        )
        self._remove_btn.grid(row=6, column=0, padx=8, pady=(0, 8), sticky="ew")
        self._remove_btn.configure(state="disabled")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # public API
    def set_file_info(self, file: Optional[SourceFile]) -> None:
        """Показывает имя, размер и тип файла; `None` очищает блок."""
        if file is None:
            self._name_val.set("—")
            self._size_val.set("—")
            self._type_val.set("—")
            self._remove_btn.configure(state="disabled")
            return
        self._name_val.set(f"Имя: {file.name}")
        self._size_val.set(f"Размер: {format_bytes(file.size)}")
        self._type_val.set(f"Тип: {file.media_type}")
        self._remove_btn.configure(state="normal")

    def set_busy(self, busy: bool) -> None:
        state = "disabled" if busy else "normal"
        self._open_btn.configure(state=state)
        if busy:
            self._remove_btn.configure(state="disabled")

    # events
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_remove_file(self) -> None:
        if self.on_remove_file:
            self.on_remove_file()
