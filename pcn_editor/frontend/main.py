import os
import sys

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import (
    QApplication, QComboBox, QFileDialog, QFrame, QGroupBox, QHBoxLayout, QHeaderView,
    QLabel, QLineEdit, QMessageBox, QPushButton, QTableWidget, QTableWidgetItem,
    QVBoxLayout, QWidget,
)

from pcn_editor.core.layouts import LAYOUT_CHOICES
from pcn_editor.core.services.encoding import decode_upload
from pcn_editor.frontend.api_client import APIClient, APIError

COLUMNS = ["Row", "Line", "Business #", "Date", "Receipt #", "VAT", "Sum w/o VAT", "Allocation"]

BUTTON_STYLE = """
    QPushButton {
        background-color: #0066cc;
        color: white;
        border: none;
        border-radius: 4px;
        padding: 8px 16px;
        font-weight: bold;
    }
    QPushButton:hover {
        background-color: #0052a3;
    }
    QPushButton:disabled {
        background-color: #6c757d;
    }
"""

GROUP_STYLE = """
    QGroupBox {
        font-weight: bold;
        border: 1px solid #dee2e6;
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 12px;
        background-color: #ffffff;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 12px;
        padding: 0 4px 0 4px;
        color: #495057;
    }
"""


class ReceiptEditorApp(QWidget):
    def __init__(self, api_client=None):
        super().__init__()
        self.setWindowTitle("PCN874 Receipt Editor")
        self.resize(1100, 750)

        self.api = api_client or APIClient()
        self.file_path = ""
        self.encoding = "utf-8"
        self.content = ""
        self.modified_count = 0
        self.receipts = []

        self.setup_palette()
        self.create_widgets()

    def setup_palette(self):
        palette = self.palette()
        palette.setColor(QPalette.Window, QColor("#f8f9fa"))
        palette.setColor(QPalette.WindowText, QColor("#212529"))
        palette.setColor(QPalette.Base, QColor("#ffffff"))
        palette.setColor(QPalette.Highlight, QColor("#0066cc"))
        palette.setColor(QPalette.HighlightedText, QColor("#ffffff"))
        self.setPalette(palette)

    def create_widgets(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(24, 24, 24, 24)
        main_layout.setSpacing(16)

        header_layout = QHBoxLayout()
        title = QLabel("PCN874 - Allocation Numbers")
        title.setFont(QFont("Segoe UI", 18, QFont.Bold))
        title.setStyleSheet("color: #0066cc;")
        header_layout.addWidget(title)
        header_layout.addStretch()
        self.status_label = QLabel("Ready")
        header_layout.addWidget(self.status_label)
        main_layout.addLayout(header_layout)

        divider = QFrame()
        divider.setFrameShape(QFrame.HLine)
        divider.setFrameShadow(QFrame.Sunken)
        main_layout.addWidget(divider)

        # File
        file_group = QGroupBox("File")
        file_group.setStyleSheet(GROUP_STYLE)
        file_layout = QHBoxLayout()
        self.file_edit = QLineEdit()
        self.file_edit.setReadOnly(True)
        self.file_edit.setPlaceholderText("Choose a PCN874 file...")
        browse_btn = QPushButton("Browse")
        browse_btn.setStyleSheet(BUTTON_STYLE)
        browse_btn.clicked.connect(self.browse_file)
        self.layout_combo = QComboBox()
        for layout_id, description in LAYOUT_CHOICES:
            self.layout_combo.addItem(description, layout_id)
        self.layout_combo.setCurrentIndex(self.layout_combo.findData("delimited"))
        self.load_btn = QPushButton("Load")
        self.load_btn.setStyleSheet(BUTTON_STYLE)
        self.load_btn.clicked.connect(self.load_file)
        file_layout.addWidget(self.file_edit, 1)
        file_layout.addWidget(browse_btn)
        file_layout.addWidget(self.layout_combo)
        file_layout.addWidget(self.load_btn)
        file_group.setLayout(file_layout)
        main_layout.addWidget(file_group)

        # Search
        search_group = QGroupBox("Search")
        search_group.setStyleSheet(GROUP_STYLE)
        search_layout = QHBoxLayout()
        self.receipt_edit = QLineEdit()
        self.receipt_edit.setPlaceholderText("Receipt number")
        self.business_edit = QLineEdit()
        self.business_edit.setPlaceholderText("Business number (optional)")
        self.business_edit.setMaxLength(9)
        search_btn = QPushButton("Search")
        search_btn.setStyleSheet(BUTTON_STYLE)
        search_btn.clicked.connect(self.search)
        show_all_btn = QPushButton("Show all")
        show_all_btn.setStyleSheet(BUTTON_STYLE)
        show_all_btn.clicked.connect(lambda: self.fill_table(self.receipts))
        search_layout.addWidget(self.receipt_edit)
        search_layout.addWidget(self.business_edit)
        search_layout.addWidget(search_btn)
        search_layout.addWidget(show_all_btn)
        search_group.setLayout(search_layout)
        main_layout.addWidget(search_group)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setSelectionMode(QTableWidget.SingleSelection)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        main_layout.addWidget(self.table, 1)

        # Allocation
        alloc_group = QGroupBox("Allocation number")
        alloc_group.setStyleSheet(GROUP_STYLE)
        alloc_layout = QHBoxLayout()
        self.allocation_edit = QLineEdit()
        self.allocation_edit.setPlaceholderText("Up to 9 digits")
        self.allocation_edit.setMaxLength(9)
        self.apply_btn = QPushButton("Apply to selected receipt")
        self.apply_btn.setStyleSheet(BUTTON_STYLE)
        self.apply_btn.clicked.connect(self.apply_allocation)
        self.save_btn = QPushButton("Save file")
        self.save_btn.setStyleSheet(BUTTON_STYLE)
        self.save_btn.setEnabled(False)
        self.save_btn.clicked.connect(self.save_file)
        alloc_layout.addWidget(self.allocation_edit)
        alloc_layout.addWidget(self.apply_btn)
        alloc_layout.addStretch()
        alloc_layout.addWidget(self.save_btn)
        alloc_group.setLayout(alloc_layout)
        main_layout.addWidget(alloc_group)

    @property
    def layout_id(self):
        return self.layout_combo.currentData()

    def browse_file(self):
        filename, _ = QFileDialog.getOpenFileName(
            self, "Choose a PCN874 file", "", "PCN874 files (*.txt);;All files (*)"
        )
        if filename:
            self.file_path = filename
            self.file_edit.setText(filename)
            self.status_label.setText(f"Selected: {os.path.basename(filename)}")

    def load_file(self):
        if not self.file_path:
            QMessageBox.critical(self, "Error", "Choose a file first")
            return
        try:
            with open(self.file_path, 'rb') as f:
                self.content, self.encoding = decode_upload(f.read())
            data = self.api.parse_content(self.content, layout=self.layout_id)
        except (OSError, ValueError, APIError) as e:
            QMessageBox.critical(self, "Error", f"Could not load the file: {e}")
            self.status_label.setText("Load failed")
            return

        self.receipts = data['receipts']
        self.modified_count = 0
        self.save_btn.setEnabled(False)
        self.fill_table(self.receipts)
        errors = data.get('errors') or []
        self.status_label.setText(
            f"{data['total_receipts']} receipts, {len(errors)} invalid rows ({self.encoding})"
        )

    def fill_table(self, receipts):
        self.table.setRowCount(0)
        for receipt in receipts:
            display = receipt['display']
            row = self.table.rowCount()
            self.table.insertRow(row)
            values = [
                receipt['row_index'], receipt['line_number'], display['business_number'],
                display['date'], display['receipt_number'], display['vat_amount'],
                display['sum_without_vat'], display['allocation_number'],
            ]
            for col, value in enumerate(values):
                item = QTableWidgetItem(str(value))
                if col == 0:
                    item.setData(Qt.UserRole, receipt['row_index'])
                self.table.setItem(row, col, item)

    def search(self):
        receipt_number = self.receipt_edit.text().strip()
        if not receipt_number:
            QMessageBox.warning(self, "Search", "Enter a receipt number")
            return
        if not self.content:
            QMessageBox.warning(self, "Search", "Load a file first")
            return
        try:
            data = self.api.search(self.content, receipt_number,
                                   business_number=self.business_edit.text().strip() or None,
                                   layout=self.layout_id)
        except APIError as e:
            QMessageBox.critical(self, "Search", e.message)
            return

        if 'receipt' in data:
            found = [data['receipt']] if data['receipt'] else []
        else:
            found = data['receipts']
        self.fill_table(found)
        self.status_label.setText(f"{len(found)} matching receipts")

    def apply_allocation(self):
        selected = self.table.selectedItems()
        if not selected:
            QMessageBox.warning(self, "Allocation", "Select a receipt first")
            return
        row_index = self.table.item(selected[0].row(), 0).data(Qt.UserRole)
        try:
            data = self.api.update_receipt(self.content, row_index,
                                           self.allocation_edit.text().strip(),
                                           layout=self.layout_id)
        except APIError as e:
            QMessageBox.critical(self, "Allocation", e.message)
            return

        self.content = data['modified_content']
        updated = data['modified_receipt']
        self.receipts = [updated if r['row_index'] == row_index else r for r in self.receipts]
        self.table.item(selected[0].row(), 7).setText(updated['allocation_number'])
        self.modified_count += 1
        self.save_btn.setEnabled(True)
        self.status_label.setText(f"{self.modified_count} receipts modified")

    def save_file(self):
        base, ext = os.path.splitext(os.path.basename(self.file_path))
        save_path, _ = QFileDialog.getSaveFileName(
            self, "Save modified file", f"{base}_modified{ext or '.txt'}",
            "PCN874 files (*.txt);;All files (*)"
        )
        if not save_path:
            return
        try:
            # newline='' keeps the CRLF/LF choice made by the editor
            with open(save_path, 'w', encoding=self.encoding, newline='') as f:
                f.write(self.content)
        except (OSError, UnicodeEncodeError) as e:
            QMessageBox.critical(self, "Error", f"Could not save the file: {e}")
            return
        self.status_label.setText(f"Saved: {os.path.basename(save_path)}")


def main():
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    window = ReceiptEditorApp()
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
