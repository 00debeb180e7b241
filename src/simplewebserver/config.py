"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the web server.

Every tunable the server uses lives in one dataclass. Values come from
(highest priority first):

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m simplewebserver 3000 --root ./www                │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── WEB_PORT=3000 python -m simplewebserver                    │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServerConfig:
    """
    Configuration for the web server.
    
    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================
    
    NETWORK SETTINGS
    - host, port, backlog, read_timeout, accept_timeout
    
    CONTENT
    - root_dir, server_name, server_tag
    
    LOGGING
    - log_level
    
    =========================================================================
    EXAMPLE
    =========================================================================
    
        ServerConfig(
            host="127.0.0.1",    # Localhost only
            port=8080,           # High port (no sudo)
            root_dir="./www",    # Serve from here instead of the cwd
            log_level="DEBUG",   # Show every request line
        )
    
    =========================================================================
    """
    
    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────
    
    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All network interfaces (default)
    - "127.0.0.1" - Localhost only
    """
    
    port: int = 8080
    """
    The port number to listen on. 0 lets the OS pick a free port.
    """
    
    backlog: int = 50
    """
    Maximum number of queued connections waiting for accept().
    """
    
    read_timeout: float = 30.0
    """
    Idle timeout in seconds while reading a request.
    A client that stays silent this long before finishing its header block
    is treated as having abandoned the request.
    """
    
    accept_timeout: float = 1.0
    """
    How often (seconds) the accept loop wakes up to check for shutdown().
    """
    
    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────
    
    root_dir: Optional[str] = None
    """
    Directory prepended to every request path.
    None = the process's current working directory, looked up per request.
    """
    
    server_name: str = "SimpleWebServer/1.0"
    """
    Value of the Server response header.
    """
    
    server_tag: str = "simplewebserver.localdomain"
    """
    Text appended after <cs371server> markers in served HTML.
    """
    
    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────
    
    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    
    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.
        
        WEB_HOST          Server host (default: 0.0.0.0)
        WEB_PORT          Server port (default: 8080)
        WEB_ROOT          Document root (default: current directory)
        WEB_READ_TIMEOUT  Request idle timeout in seconds (default: 30)
        WEB_LOG_LEVEL     Logging level (default: INFO)
        """
        return cls(
            host=os.getenv("WEB_HOST", "0.0.0.0"),
            port=int(os.getenv("WEB_PORT", "8080")),
            root_dir=os.getenv("WEB_ROOT"),
            read_timeout=float(os.getenv("WEB_READ_TIMEOUT", "30")),
            log_level=os.getenv("WEB_LOG_LEVEL", "INFO"),
        )
    
    @property
    def document_root(self) -> str:
        """The directory request paths are appended to."""
        return self.root_dir if self.root_dir is not None else os.getcwd()
    
    def validate(self) -> None:
        """
        Validate configuration values.
        
        Called once at startup so a bad value fails immediately instead
        of on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")
        
        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")
        
        if self.read_timeout <= 0:
            raise ValueError("read_timeout must be > 0")
        
        if self.accept_timeout <= 0:
            raise ValueError("accept_timeout must be > 0")
