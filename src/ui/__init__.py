from src.ui.main_window import MainWindow
from src.ui.settings_page import SettingsPage
from src.ui.transfer_list import SummonTransferDialog

__all__ = ["MainWindow", "SettingsPage", "SummonTransferDialog"]
