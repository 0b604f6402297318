"""TaskTrack — personal project and task tracking backend.

Session-authenticated REST API: users register, log in, and manage
projects and the tasks nested under them. Every resource is scoped
to the account that owns it.
"""

__version__ = "0.1.0"
