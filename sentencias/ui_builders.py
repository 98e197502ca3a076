import flet as ft

APP_TITLE = "Decisiones TSJ"


def configure_window_and_theme(page: ft.Page):
    page.title = APP_TITLE
    page.vertical_alignment = ft.MainAxisAlignment.START
    page.horizontal_alignment = ft.CrossAxisAlignment.STRETCH
    page.window.width = 1200
    page.window.height = 800
    page.window.min_width = 720
    page.window.center()

    page.theme_mode = ft.ThemeMode.LIGHT
    page.theme = ft.Theme(color_scheme=ft.ColorScheme(primary=ft.Colors.BLUE_600))


def build_footer() -> ft.Row:
    footer = ft.Text(
        "Consulta y filtra las sentencias del Tribunal Supremo",
        color=ft.Colors.GREY_500,
        text_align=ft.TextAlign.CENTER,
    )
    return ft.Row(controls=[footer], alignment=ft.MainAxisAlignment.CENTER)


def compose_page(screen: ft.Container, footer: ft.Control) -> ft.Column:
    """Screen on top, footer pinned to the bottom."""
    return ft.Column(
        controls=[screen, footer],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
        expand=True,
        spacing=0,
    )
