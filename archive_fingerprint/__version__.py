__title__ = 'archive-fingerprint'
__description__ = 'Fingerprints zip/jar archives into a compact text encoding and compares them.'
__url__ = 'https://github.com/JBamberger/archive-fingerprint'
__version__ = '0.1.0'
__author__ = 'Jan Bamberger'
__author_email__ = 'jbamberger@users.noreply.github.com'
__license__ = 'MIT'
__copyright__ = 'Copyright 2026 Jan Bamberger'
