"""Точка входа в оконное приложение."""
from pnm_editor.app import PnmEditorApp
from pnm_editor.config import EditorConfig, configure_logging


def main() -> None:
    """Читает настройки, настраивает логирование и запускает главное окно."""
    config = EditorConfig.from_env()
    configure_logging(config.log_level)
    app = PnmEditorApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
