"""Точка входа в приложение."""
from filetailor.app import FileTailorApp
from filetailor.config import configure_logging


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно приложения."""
    configure_logging()
    app = FileTailorApp()
    app.mainloop()


if __name__ == "__main__":
    main()
