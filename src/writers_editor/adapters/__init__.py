"""Host adapters that drive an ``EditorSession``."""
