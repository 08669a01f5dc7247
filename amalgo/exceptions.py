class AmalgoError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(AmalgoError):
    # invalid or inconsistent configuration, reported before any scanning.
    pass

class DiscoveryError(AmalgoError):
    # errors while building filters or walking the tree.
    pass

class TemplateError(AmalgoError):
    # errors related to template rendering.
    pass

class OutputError(AmalgoError):
    # errors during output operations.
    pass
