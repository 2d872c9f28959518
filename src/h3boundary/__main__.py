from .cli import app

app(prog_name="h3togeoboundary")
