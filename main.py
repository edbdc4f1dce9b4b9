"""Ocean Notes terminal client entry point."""

from dotenv import load_dotenv

# Load environment variables before the client reads its configuration
load_dotenv()

from notes_cli.client import main  # noqa: E402

if __name__ == "__main__":
    main()
