from splitbill.cli import run

run()
