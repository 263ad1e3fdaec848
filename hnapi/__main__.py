from hnapi.cli import run

run()
