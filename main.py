"""Main entry point for running the Streamlit app"""
import subprocess
import sys
from pathlib import Path
import dotenv

dotenv.load_dotenv()

def main():
    """Run the Streamlit app (start the API first with `billsplit-api`)"""
    app_path = Path(__file__).parent / "frontend" / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])

if __name__ == "__main__":
    main()
