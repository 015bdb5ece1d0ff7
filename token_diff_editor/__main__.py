import sys

from token_diff_editor.cli import app

if __name__ == "__main__":
    app(args=["serve", *sys.argv[1:]], prog_name="token-diff-editor")
