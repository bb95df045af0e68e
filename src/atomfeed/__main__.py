from atomfeed.cli.app import app

app()
