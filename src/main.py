"""Main entry point for the task queue CLI (`todo`)."""
from cli import app


def main():
    app(prog_name="todo")

if __name__ == "__main__":
    main()
