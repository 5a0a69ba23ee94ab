import logging
import sys

from PyQt5.QtWidgets import QApplication

from PF_Libs.EditorLib.editor_window import PhotoFilterEditorWindow


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    app = QApplication(sys.argv)
    window = PhotoFilterEditorWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
