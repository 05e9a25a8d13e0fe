# UI.py
""""PySide6 user interface for LiveCalc.

Structure
---------
- Calculator UI: main window with expression line, result display and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Translate button presses and key presses into Calculator actions
- Long-press on AC clears without waiting for the release
- Flash the matching button when a key is typed
- Render the expression text and the live preview / result text
- Clipboard integration (copy result, paste expression)


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (minimum and maximum values per setting)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is instant, so every action runs on the Qt thread and finishes before the next event is handled.
The only timer-driven behavior is the AC long-press and the short key flash.
"""""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QTimer
import sys
import logging
from pathlib import Path
import pyperclip
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import Calculator as Calculator  # Imports Calculator.py as a module

logger = logging.getLogger(__name__)

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

FLASH_MS = 140

# (label, type, action, row, column, column span)
BUTTON_LAYOUT = [
    ('⚙️', 'tool', 'settings', 0, 0, 1), ('📋', 'tool', 'copy', 0, 1, 1), ('⌫', 'tool', 'backspace', 0, 3, 1),

    ('AC', 'func', 'clear', 1, 0, 1), ('+/−', 'func', 'neg', 1, 1, 1), ('%', 'func', 'percent', 1, 2, 1), ('÷', 'op', '/', 1, 3, 1),
    ('7', 'digit', '7', 2, 0, 1), ('8', 'digit', '8', 2, 1, 1), ('9', 'digit', '9', 2, 2, 1), ('×', 'op', '*', 2, 3, 1),
    ('4', 'digit', '4', 3, 0, 1), ('5', 'digit', '5', 3, 1, 1), ('6', 'digit', '6', 3, 2, 1), ('−', 'op', '-', 3, 3, 1),
    ('1', 'digit', '1', 4, 0, 1), ('2', 'digit', '2', 4, 1, 1), ('3', 'digit', '3', 4, 2, 1), ('+', 'op', '+', 4, 3, 1),
    ('0', 'digit', '0', 5, 0, 2), ('.', 'digit', '.', 5, 2, 1), ('=', 'func', 'enter', 5, 3, 1),
]

# Keys that map 1:1 onto an action (text of the key event -> action)
KEY_ACTIONS = {
    '.': '.', '+': '+', '-': '-', '*': '*', '/': '/', '(': '(', ')': ')',
    '%': 'percent', '=': 'enter',
}

BUTTON_STYLES = {
    False: {
        'digit': "background-color: #e0e0e0; color: black; font-weight: bold;",
        'op': "background-color: #ff9f0a; color: white; font-weight: bold;",
        'func': "background-color: #a5a5a5; color: black; font-weight: bold;",
        'tool': "font-weight: normal;",
    },
    True: {
        'digit': "background-color: #333333; color: white; font-weight: bold;",
        'op': "background-color: #ff9f0a; color: white; font-weight: bold;",
        'func': "background-color: #a5a5a5; color: black; font-weight: bold;",
        'tool': "background-color: #121212; color: white; font-weight: normal;",
    },
}


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening and error
    message if something went wrong.

    All of the Settings can be seperated into two categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as an Integer)

    """""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Setting key -> widget, read back when saving

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = config_manager.MINIMUM_VALUES.get(key_value)
                maximum = config_manager.MAXIMUM_VALUES.get(key_value)
                label_text = description if minimum is None else f"{description} ({minimum}-{maximum}):"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            # --- 1. Handle Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- 2. Handle Input Fields ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    # --- 3. Validation ---
                    new_value_int = int(new_value_str)
                    minimum = config_manager.MINIMUM_VALUES.get(key_value)
                    if minimum is not None and new_value_int < minimum:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is {minimum}.")
                    maximum = config_manager.MAXIMUM_VALUES.get(key_value)
                    if maximum is not None and new_value_int > maximum:
                        raise ValueError(f"'{new_value_int}' is too large. Maximum is {maximum}.")
                    setting_value_list[key_value] = new_value_int

                except ValueError as e:
                    # Show an error box and STOP the save process
                    logger.warning("Invalid input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return

        # --- 4. Write to File ---
        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           "Settings could not be saved (error in config_manager).")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self, calculator=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.calculator = calculator or Calculator.Calculator(self.setting_value_list["decimal_places"])
        self.button_objects = {}  # action -> button
        self.button_types = {}  # action -> 'digit' / 'op' / 'func' / 'tool'

        # Single-shot: fires once if AC is still held after clear_hold_ms
        self.hold_timer = QTimer(self)
        self.hold_timer.setSingleShot(True)
        self.hold_timer.timeout.connect(self.handle_clear_hold)

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.setWindowTitle("LiveCalc")
        self.resize(320, 520)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.expression_label = QtWidgets.QLabel(self.calculator.expression_text)
        self.expression_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.expression_label.font()
        font.setPointSize(18)
        self.expression_label.setFont(font)
        main_v_layout.addWidget(self.expression_label)

        self.display = QtWidgets.QLineEdit(self.calculator.result_text)
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(40)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(2)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for i in range(6):
            button_grid.setRowStretch(i, 1)
        for j in range(4):
            button_grid.setColumnStretch(j, 1)

        # --- 6. Button Creation Loop ---
        for text, button_type, action, row, col, span in BUTTON_LAYOUT:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setAccessibleName(text)
            # Keyboard input goes to the window, not to a focused button
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)

            if action == 'clear':
                # AC reacts to press (start hold timer) and release (clear)
                button.pressed.connect(self.handle_clear_pressed)
                button.released.connect(self.handle_clear_released)
            elif action == 'settings':
                button.clicked.connect(self.open_settings)
            elif action == 'copy':
                button.clicked.connect(self.copy_result)
            else:
                button.clicked.connect(lambda checked=False, val=action: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, span)
            self.button_objects[action] = button
            self.button_types[action] = button_type

        self.update_darkmode()
        self.refresh_display()

    # --- AC Hold Logic ---
    def handle_clear_pressed(self):
        self.hold_timer.setInterval(self.setting_value_list["clear_hold_ms"])
        self.hold_timer.start()

    def handle_clear_hold(self):
        logger.debug("AC held, clearing")
        self.calculator.clear()
        self.refresh_display()

    def handle_clear_released(self):
        # Always stop the pending hold first; release clears in either case
        self.hold_timer.stop()
        button = self.button_objects['clear']
        if button.underMouse():
            self.calculator.clear()
            self.refresh_display()

    # --- Input ---
    def handle_button_press(self, action):
        self.calculator.apply_action(action)
        self.refresh_display()

    def keyPressEvent(self, event):
        key = event.key()
        text = event.text()

        if event.matches(QtGui.QKeySequence.StandardKey.Copy):
            self.copy_result()
        elif event.matches(QtGui.QKeySequence.StandardKey.Paste):
            self.paste_expression()
        elif text and text in "0123456789":
            self.handle_button_press(text)
            self.flash_button(text)
        elif text in KEY_ACTIONS:
            action = KEY_ACTIONS[text]
            self.handle_button_press(action)
            self.flash_button(action)
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press('enter')
            self.flash_button('enter')
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press('backspace')
            self.flash_button('backspace')
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press('clear')
            self.flash_button('clear')
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def flash_button(self, action):
        # Short pressed-look feedback for keyboard input
        button = self.button_objects.get(action)
        if not button:
            return
        button.setDown(True)
        QTimer.singleShot(FLASH_MS, lambda: button.setDown(False))

    # --- Clipboard ---
    def copy_result(self):
        pyperclip.copy(self.calculator.result_text)
        logger.debug("Copied %r to clipboard", self.calculator.result_text)

    def paste_expression(self):
        clipboard_text = pyperclip.paste()
        if clipboard_text:
            self.calculator.type_text(clipboard_text.strip())
            self.refresh_display()

    # --- Output ---
    def refresh_display(self):
        self.expression_label.setText(self.calculator.expression_text)
        self.display.setText(self.calculator.result_text)
        self.update_font_size_display()

    def update_font_size_display(self):
        # Shrink the result font until the text fits, grow it back up to the maximum
        MAX_FONT_SIZE = 40
        MIN_FONT_SIZE = 10
        current_text = self.display.text()

        font = self.display.font()
        current_size = MAX_FONT_SIZE
        font.setPointSize(current_size)
        fm = QtGui.QFontMetrics(font)

        r_margin = self.display.textMargins().right()
        l_margin = self.display.textMargins().left()
        available_width = self.display.width() - (l_margin + r_margin + 10)

        while fm.horizontalAdvance(current_text) > available_width and current_size > MIN_FONT_SIZE:
            current_size -= 1
            font.setPointSize(current_size)
            fm = QtGui.QFontMetrics(font)

        self.display.setFont(font)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.update_font_size_display()

    # --- Appearance / Settings ---
    def update_darkmode(self):
        darkmode = self.setting_value_list["darkmode"] == True
        styles = BUTTON_STYLES[darkmode]
        for action, button in self.button_objects.items():
            button.setStyleSheet(styles[self.button_types[action]])

        if darkmode:
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold; border: none;")
            self.expression_label.setStyleSheet("color: #a5a5a5;")
        else:
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold; border: none;")
            self.expression_label.setStyleSheet("color: #555555;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload settings after dialog closes so darkmode / decimals / hold time apply
        self.setting_value_list = config_manager.load_setting_value("all")
        self.calculator.set_decimal_places(self.setting_value_list["decimal_places"])
        self.update_darkmode()
        self.refresh_display()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
