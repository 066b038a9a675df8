# hexyg/__about__.py

APP_NAME        = "hexyg"
APP_TITLE       = "Binary ⇆ Hex Text Converter"   # long name used by --help
AUTHOR          = "Wired Square"
COPYRIGHT_YEAR  = "2025"
COPYRIGHT       = f"© {COPYRIGHT_YEAR} {AUTHOR}"
HOMEPAGE        = "https://github.com/Wired-Square/hexyg"


__version__ = "0.1.0.dev1"

__all__ = [
    "__version__",
    "APP_NAME", "APP_TITLE",
    "AUTHOR", "COPYRIGHT_YEAR", "COPYRIGHT", "HOMEPAGE",
]

def about_text() -> str:
    return (
        f"{APP_NAME} {__version__}: {APP_TITLE}\n"
        f"{COPYRIGHT}\n"
        f"{HOMEPAGE}"
    )
