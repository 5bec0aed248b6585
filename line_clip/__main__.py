import sys

from line_clip.cli import main

sys.exit(main())
