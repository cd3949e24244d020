import sys

from .cli.image_editor import main

sys.exit(main())
