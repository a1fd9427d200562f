from env_at_startup.cli.main import run

run()
