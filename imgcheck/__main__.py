from imgcheck.main import cli

cli()
