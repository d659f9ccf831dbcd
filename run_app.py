"""Entry-Point für PyInstaller – startet den Disk-Report-Scan auf der Kommandozeile."""

from disk_report.scan import main

if __name__ == "__main__":
    main()
