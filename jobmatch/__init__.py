"""Candidate-job matching engine for the job board backend."""

from jobmatch.utils.constants import APP_NAME, VERSION

__app_name__ = APP_NAME
__version__ = VERSION
