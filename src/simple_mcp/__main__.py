from simple_mcp.interfaces.cli import app

app()
