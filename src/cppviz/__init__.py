__version__ = "0.1.0"

SOURCE_EXTENSIONS = (".c", ".cpp", ".h", ".hpp", ".cc", ".hh", ".cxx", ".hxx")


def get_language_map():
    """Map every supported file extension to the language it is parsed as."""
    return {
        extension: "c" if extension in (".c", ".h") else "cpp"
        for extension in SOURCE_EXTENSIONS
    }
