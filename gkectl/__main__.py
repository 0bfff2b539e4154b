from gkectl.cli import app

app(prog_name="gkectl")
