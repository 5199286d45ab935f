"""Контроллер приложения: оркестрация UI и движка подгонки.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики подгонки размера).
- DIP: движок внедряется через поле `engine`; UI ничего не знает о сервисах.
Clean Code:
- Обработчики компактны; тяжёлая работа выполняется в отдельном потоке.
"""
from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from tkinter import TclError, filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from filetailor.models.tailoring_model import (
    Mode,
    SourceFile,
    TailoringFailure,
    TailoringOutcome,
    TailoringResult,
)
from filetailor.services.file_service import FileTooLargeError, load_source_file, save_result
from filetailor.services.selection_service import kb_to_bytes
from filetailor.services.tailoring_service import TailoringEngine
from filetailor.ui.bottom_bar import BottomBar
from filetailor.ui.configure_panel import ConfigurePanel
from filetailor.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50


@dataclass
class AppController:
    """Связывает элементы UI с движком подгонки.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка файла через `file_service` с проверкой лимита 50 MB.
    - Запуск `TailoringEngine` в рабочем потоке, не больше одного запуска за раз.
    - Переключение шагов: upload -> configure -> processing -> success | error.
    """
    sidebar: Sidebar
    configure_panel: ConfigurePanel
    bottom: BottomBar
    window: ctk.CTk

    engine: TailoringEngine = field(default_factory=TailoringEngine)
    _current_file: Optional[SourceFile] = None
    _result: Optional[TailoringResult] = None
    _step: str = "upload"  # "upload" | "configure" | "processing" | "success" | "error"
    _outcomes: queue.Queue = field(default_factory=queue.Queue)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_remove_file = self._handle_reset
        self.configure_panel.on_process = self._handle_process
        self.bottom.on_save = self._handle_save
        self.bottom.on_reset = self._handle_reset

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        if self._step == "processing":
            return
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите файл",
                filetypes=(
                    ("All files", "*.*"),
                    ("Images", "*.png *.jpg *.jpeg *.webp"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            source = load_source_file(file_path)
        except (FileNotFoundError, FileTooLargeError) as exc:
            self._show_error(str(exc))
            return
        except OSError as exc:
            logger.error(f"Failed to read {file_path}: {exc}")
            self._show_error(f"Не удалось прочитать файл: {exc}")
            return

        self._current_file = source
        self._result = None
        self._step = "configure"
        self.sidebar.set_file_info(source)
        self.configure_panel.set_file(source)
        self.bottom.show_configure()

    def _handle_process(self, mode: Mode, target_kb: float) -> None:
        if self._current_file is None or self._step == "processing":
            return
        target_bytes = kb_to_bytes(target_kb)
        source = self._current_file
        logger.info(f"Processing '{source.name}': mode={mode.value}, target={target_bytes} bytes")

        self._step = "processing"
        self.sidebar.set_busy(True)
        self.configure_panel.set_busy(True)
        self.bottom.show_processing()

        worker = threading.Thread(
            target=self._run_engine, args=(source, mode, target_bytes), name="filetailor-engine", daemon=True
        )
        worker.start()
        self.window.after(POLL_INTERVAL_MS, self._poll_outcome)

    def _handle_save(self) -> None:
        if self._result is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                initialfile=self._result.suggested_name,
            )
        except TclError:
            return

        if not file_path:
            return

        try:
            save_result(self._result, file_path)
        except OSError as exc:
            logger.error(f"Failed to save {file_path}: {exc}")
            messagebox.showerror("Ошибка сохранения", f"Не удалось сохранить файл: {exc}")

    def _handle_reset(self) -> None:
        if self._step == "processing":
            return
        self._current_file = None
        self._result = None
        self._step = "upload"
        self.sidebar.set_file_info(None)
        self.configure_panel.set_file(None)
        self.bottom.show_idle()

    # ---- Worker ----
    def _run_engine(self, source: SourceFile, mode: Mode, target_bytes: int) -> None:
        try:
            outcome: object = self.engine.process(source, mode, target_bytes)
        except Exception as exc:  # unexpected: surfaced to the user, not retried
            logger.exception(f"Unexpected error while processing '{source.name}'")
            outcome = exc
        self._outcomes.put(outcome)

    def _poll_outcome(self) -> None:
        try:
            outcome = self._outcomes.get_nowait()
        except queue.Empty:
            self.window.after(POLL_INTERVAL_MS, self._poll_outcome)
            return
        self._finish(outcome)

    def _finish(self, outcome: TailoringOutcome | Exception) -> None:
        self.sidebar.set_busy(False)
        self.configure_panel.set_busy(False)
        source = self._current_file
        if isinstance(outcome, TailoringResult) and source is not None:
            self._result = outcome
            self._step = "success"
            self.sidebar.set_file_info(source)
            self.bottom.show_success(source.size, outcome.achieved_size)
        elif isinstance(outcome, TailoringFailure):
            self._show_error(outcome.message)
        else:
            self._show_error(str(outcome) or "Неизвестная ошибка при обработке.")

    # ---- Helpers ----
    def _show_error(self, message: str) -> None:
        self._step = "error"
        self._result = None
        self._current_file = None
        self.sidebar.set_file_info(None)
        self.configure_panel.set_file(None)
        self.bottom.show_error(message)
