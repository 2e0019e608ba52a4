from docmanual.markdown.renderer import PASSES, render_markdown

__all__ = ["PASSES", "render_markdown"]
