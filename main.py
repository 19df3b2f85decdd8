"""
Entry point script for the ask_stream application.
This allows running the app directly from the project root.
"""
from ask_stream.main import main

if __name__ == "__main__":
    main()
