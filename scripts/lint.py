"""
Lint script runner.
"""
import subprocess


def main():
    """
    Lint the Quill project using flake8 and pylint.
    """
    print("Running flake8...")
    subprocess.run([
        "flake8",
        "./quill",
        "./ql.py",
        "--exclude=quill/tests",
        "--max-line-length=120",
    ], check=True)

    print("Running pylint...")
    subprocess.run([
        "pylint",
        "./quill",
        "./ql.py",
        "--ignore=tests",
        "--max-line-length=120",
    ], check=True)


if __name__ == "__main__":
    main()
