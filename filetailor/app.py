import customtkinter as ctk

from filetailor.controllers.app_controller import AppController
from filetailor.ui.bottom_bar import BottomBar
from filetailor.ui.configure_panel import ConfigurePanel
from filetailor.ui.sidebar import Sidebar


class FileTailorApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("File Tailor")
        self.minsize(760, 420)

        # root layout: left configure panel, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._configure_panel = ConfigurePanel(self)
        self._configure_panel.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            sidebar=self._sidebar, configure_panel=self._configure_panel, bottom=self._bottom, window=self
        )
        self._controller.bind_events()
