class CatererError(Exception):
    """Base class for every error the search and build commands report."""


class WorkNotFound(CatererError):
    def __init__(self, work_id):
        self.work_id = work_id
        super().__init__(f"No work with id tt{work_id:07d} in the catalog")


class StoreUnavailable(CatererError):
    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"Catalog store unavailable: {detail}")


class MalformedIdentifier(CatererError):
    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Cannot parse work identifier {raw!r}")


class CatalogFormatError(CatererError):
    def __init__(self, path, line, lineno=1):
        self.path = path
        self.line = line
        self.lineno = lineno
        if lineno == 1:
            message = f"File {path} does not match expected header: {line!r}"
        else:
            message = f"File {path} line {lineno} is malformed: {line!r}"
        super().__init__(message)


class ConfigError(CatererError):
    pass
