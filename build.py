"""
Builds the FolderInsights console exe
"""
import os
import shutil
import subprocess
import sys

def build():
    print("Cleaning old builds...")
    for folder in ['build', 'dist']:
        if os.path.exists(folder):
            shutil.rmtree(folder)

    print("Building exe...")

    exe_name = 'FolderInsights.exe' if sys.platform.startswith('win') else 'FolderInsights'
    cmd = [
        'pyinstaller',
        '--onefile',
        '--console',
        '--name', 'FolderInsights',
        '--hidden-import', 'psutil',
        '--hidden-import', 'rich',
        '--exclude-module', 'PySide6',
        'main.py'
    ]

    result = subprocess.run(cmd, capture_output=True, text=True)

    if result.returncode == 0:
        print("Build finished!")
        print(f"EXE file: dist/{exe_name}")

        release_dir = 'release'
        os.makedirs(release_dir, exist_ok=True)

        exe_src = os.path.join('dist', exe_name)
        shutil.copy(exe_src, os.path.join(release_dir, exe_name))

        if os.path.exists('README.md'):
            shutil.copy('README.md', os.path.join(release_dir, 'README.md'))

        print(f"Release is in: {release_dir}/")
    else:
        print("Build failed:")
        print(result.stderr)
        sys.exit(1)

if __name__ == '__main__':
    build()
