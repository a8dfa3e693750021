from notesfeed.cli import app

app()
