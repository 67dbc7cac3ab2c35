"""
Theme definitions for the dashboard GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY_BLUE = "#0364B8"
    PRIMARY_BLUE_HOVER = "#0A2767"
    PRIMARY_BLUE_PRESSED = "#0A2767"

    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    DISABLED_BG = "#e0e0e0"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"
    TEXT_DISABLED = "#757575"
    TEXT_ON_PRIMARY = "#ffffff"

    # Borders & Dividers
    BORDER = "#e0e0e0"
    GRID = "#cccccc"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"

    # Chart series
    SERIES_SALES = "#8884d8"
    SERIES_REVENUE = "#82ca9d"


class Fonts:
    WEIGHT_MEDIUM = 500
    WEIGHT_BOLD = 700


class Styles:
    # Common QSS fragments

    BUTTON_PRIMARY = f"""
        QPushButton {{
            background-color: {Colors.PRIMARY_BLUE};
            color: {Colors.TEXT_ON_PRIMARY};
            border-radius: 6px;
            padding: 10px 20px;
            font-weight: {Fonts.WEIGHT_MEDIUM};
            border: none;
        }}
        QPushButton:hover {{
            background-color: {Colors.PRIMARY_BLUE_HOVER};
        }}
        QPushButton:pressed {{
            background-color: {Colors.PRIMARY_BLUE_PRESSED};
        }}
        QPushButton:disabled {{
            background-color: {Colors.DISABLED_BG};
            color: {Colors.TEXT_DISABLED};
        }}
    """

    DASHBOARD = f"""
        QWidget#dashboardContent {{
            background-color: {Colors.SURFACE};
        }}
        QLabel {{
            color: {Colors.TEXT_PRIMARY};
        }}
        QLabel#title {{
            font-size: 28px;
            font-weight: {Fonts.WEIGHT_BOLD};
        }}
        QLabel#subtitle, QLabel#footer {{
            color: {Colors.TEXT_SECONDARY};
        }}
        QLabel#footer {{
            border-top: 1px solid {Colors.BORDER};
            padding-top: 8px;
        }}
        QLabel#sectionHeading {{
            font-size: 18px;
            font-weight: {Fonts.WEIGHT_BOLD};
            padding-top: 12px;
        }}
        QLabel#body {{
            font-size: 14px;
        }}
    """
