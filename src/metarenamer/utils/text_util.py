def pascal_case(name: str) -> str:
    """Map a snake_case name to the host's PascalCase spelling ("dry_run" -> "DryRun")."""
    return "".join(part.capitalize() for part in name.split("_"))
