import sys

from survey_merge.cli import main

sys.exit(main())
