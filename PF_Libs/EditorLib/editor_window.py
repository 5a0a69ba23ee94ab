from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPixmap
from PyQt5.QtWidgets import (
    QComboBox,
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from PF_Libs.AdjustLib.presets import list_presets
from PF_Libs.RenderLib.compositor import ComparisonMode
from PF_Libs.SessionLib.image_source import ImageResource
from PF_Libs.SessionLib.session import EditSession, SessionConfig
from PF_Libs.constants import (
    CHANNEL_DOMAINS,
    CHANNEL_NAMES,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    GEOMETRY_ROTATION,
    GEOMETRY_ZOOM,
    ROTATION_MAX,
    ROTATION_MIN,
    ZOOM_MAX,
    ZOOM_MIN,
)

# Qt sliders are integer based; these controls move in tenths
SLIDER_SCALES = {"blur": 10, GEOMETRY_ZOOM: 10}

CHANNEL_LABELS = {
    "brightness": "Brightness",
    "contrast": "Contrast",
    "saturation": "Saturation",
    "grayscale": "Grayscale",
    "sepia": "Sepia",
    "invert": "Invert",
    "hue_rotate": "Hue Rotate",
    "blur": "Blur",
    GEOMETRY_ZOOM: "Zoom",
    GEOMETRY_ROTATION: "Rotate",
}


class PhotoFilterEditorWindow(QMainWindow):
    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        super().__init__()
        self.setWindowTitle("Photo Filter Studio")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = EditSession(config)
        self.sliders: Dict[str, QSlider] = {}
        self.value_labels: Dict[str, QLabel] = {}

        self._build_ui()
        self._connect_signals()
        self.refresh()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        controls_col = QVBoxLayout()
        preview_col = QVBoxLayout()

        self.btn_open = QPushButton("Choose Image")
        controls_col.addWidget(self.btn_open)

        grid = QGridLayout()
        ranges = dict(CHANNEL_DOMAINS)
        ranges[GEOMETRY_ZOOM] = (ZOOM_MIN, ZOOM_MAX)
        ranges[GEOMETRY_ROTATION] = (ROTATION_MIN, ROTATION_MAX)
        for row, name in enumerate(list(CHANNEL_NAMES) + [GEOMETRY_ZOOM, GEOMETRY_ROTATION]):
            scale = SLIDER_SCALES.get(name, 1)
            minimum, maximum = ranges[name]

            minus = QPushButton("-")
            plus = QPushButton("+")
            slider = QSlider(Qt.Horizontal)
            slider.setRange(int(minimum * scale), int(maximum * scale))
            value_label = QLabel()

            minus.clicked.connect(lambda _, n=name: self.on_step(n, -1))
            plus.clicked.connect(lambda _, n=name: self.on_step(n, 1))
            slider.valueChanged.connect(lambda value, n=name: self.on_slider(n, value))

            grid.addWidget(QLabel(CHANNEL_LABELS[name]), row, 0)
            grid.addWidget(minus, row, 1)
            grid.addWidget(slider, row, 2)
            grid.addWidget(plus, row, 3)
            grid.addWidget(value_label, row, 4)
            self.sliders[name] = slider
            self.value_labels[name] = value_label
        controls_col.addLayout(grid)

        presets_row = QHBoxLayout()
        for preset in list_presets():
            button = QPushButton(preset.label)
            button.clicked.connect(lambda _, n=preset.name: self.on_preset(n))
            presets_row.addWidget(button)
        controls_col.addWidget(QLabel("Presets"))
        controls_col.addLayout(presets_row)
        controls_col.addStretch(1)

        self.preview_label = QLabel("Upload an image to start editing")
        self.preview_label.setAlignment(Qt.AlignCenter)
        self.preview_label.setMinimumHeight(DEFAULT_CANVAS_HEIGHT)
        self.preview_label.setStyleSheet("border: 1px solid #888;")

        self.split_slider = QSlider(Qt.Horizontal)
        self.split_slider.setRange(0, 100)
        self.split_slider.setValue(int(self.session.split_position))

        actions_row = QHBoxLayout()
        self.btn_undo = QPushButton("Undo")
        self.btn_redo = QPushButton("Redo")
        self.btn_reset = QPushButton("Reset")
        self.format_combo = QComboBox()
        self.format_combo.addItem("PNG", "png")
        self.format_combo.addItem("JPG", "jpg")
        self.btn_download = QPushButton("Download")
        self.btn_before = QPushButton("Show Before")
        for widget in (
            self.btn_undo,
            self.btn_redo,
            self.btn_reset,
            self.format_combo,
            self.btn_download,
            self.btn_before,
        ):
            actions_row.addWidget(widget)

        preview_col.addWidget(self.preview_label, stretch=1)
        preview_col.addWidget(self.split_slider)
        preview_col.addLayout(actions_row)

        root.addLayout(controls_col, stretch=1)
        root.addLayout(preview_col, stretch=2)

    def _connect_signals(self) -> None:
        self.btn_open.clicked.connect(self.open_image)
        self.btn_undo.clicked.connect(self.on_undo)
        self.btn_redo.clicked.connect(self.on_redo)
        self.btn_reset.clicked.connect(self.on_reset)
        self.btn_download.clicked.connect(self.download)
        self.btn_before.clicked.connect(self.on_toggle_before)
        self.split_slider.valueChanged.connect(self.on_split_changed)
        self.format_combo.currentIndexChanged.connect(self.on_format_changed)

    def open_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)",
        )
        if not file_path:
            return

        try:
            resource = ImageResource.from_path(Path(file_path))
        except OSError as e:
            QMessageBox.warning(self, "Upload Error", str(e))
            return
        self.session.load_image(resource)
        self.refresh()

    def on_slider(self, name: str, value: int) -> None:
        scaled = value / float(SLIDER_SCALES.get(name, 1))
        if name == GEOMETRY_ZOOM:
            self.session.set_geometry(zoom=scaled)
        elif name == GEOMETRY_ROTATION:
            self.session.set_geometry(rotation=scaled)
        else:
            self.session.apply_adjustment({name: scaled})
        self.refresh()

    def on_step(self, name: str, direction: int) -> None:
        if name in (GEOMETRY_ZOOM, GEOMETRY_ROTATION):
            self.session.step_geometry(name, direction)
        else:
            self.session.step_adjustment(name, direction)
        self.refresh()

    def on_preset(self, name: str) -> None:
        self.session.apply_preset(name)
        self.refresh()

    def on_undo(self) -> None:
        self.session.undo()
        self.refresh()

    def on_redo(self) -> None:
        self.session.redo()
        self.refresh()

    def on_reset(self) -> None:
        self.session.reset()
        self.refresh()

    def on_toggle_before(self) -> None:
        self.session.toggle_before()
        self.refresh()

    def on_split_changed(self, value: int) -> None:
        self.session.set_split_position(value)
        self.refresh_preview()

    def on_format_changed(self, index: int) -> None:
        self.session.export_format = self.format_combo.itemData(index)

    def download(self) -> None:
        if not self.session.has_image:
            return

        folder = QFileDialog.getExistingDirectory(self, "Select Download Directory")
        if not folder:
            return

        try:
            result = self.session.export(Path(folder))
        except OSError as e:
            QMessageBox.warning(self, "Export Failed", str(e))
            return
        QMessageBox.information(self, "Success", f"Saved {result.path}")

    def refresh(self) -> None:
        values: Dict[str, float] = self.session.adjustments.to_dict()
        values[GEOMETRY_ZOOM] = self.session.geometry.zoom
        values[GEOMETRY_ROTATION] = self.session.geometry.rotation

        for name, slider in self.sliders.items():
            slider.blockSignals(True)
            slider.setValue(int(round(values[name] * SLIDER_SCALES.get(name, 1))))
            slider.blockSignals(False)
            self.value_labels[name].setText(f"{values[name]:g}")

        self.btn_undo.setEnabled(self.session.can_undo)
        self.btn_redo.setEnabled(self.session.can_redo)
        self.btn_download.setEnabled(self.session.has_image)
        before = self.session.comparison_mode is ComparisonMode.BEFORE
        self.btn_before.setText("Show After" if before else "Show Before")
        self.split_slider.setEnabled(not before)
        self.refresh_preview()

    def refresh_preview(self) -> None:
        size = self.preview_label.size()
        preview = self.session.render_preview((max(1, size.width()), max(1, size.height())))
        if preview is None:
            self.preview_label.setText("Upload an image to start editing")
            return
        self._set_preview(self.preview_label, preview)

    def _set_preview(self, label: QLabel, image: Any) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(self._to_png_bytes(image), "PNG"):
            label.setText("Preview failed")
            return
        label.setPixmap(pixmap)

    def _to_png_bytes(self, image: Any) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
