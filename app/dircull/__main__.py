from dircull.cli.main import app

app(prog_name="dircull")
