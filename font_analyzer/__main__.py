import sys

from font_analyzer.cli import main

sys.exit(main())
