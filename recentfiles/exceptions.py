class RecentFilesError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(RecentFilesError):
    # errors related to configuration.
    pass

class DiscoveryError(RecentFilesError):
    # the search root could not be traversed at all.
    pass

class PatternError(DiscoveryError):
    # the search pattern is blank or cannot be compiled.
    pass

class OutputError(RecentFilesError):
    # errors during output operations.
    pass
