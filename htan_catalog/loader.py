"""Retrieve and parse the Synapse dataset and external atlas metadata.

These functions are the only part of the package performing I/O.
Locations are http(s) URLs or local file paths.

"""

import re
import json
import logging
import requests

from .exception import LoadError, InvalidDataset, MetadataError

logger = logging.getLogger(__name__)

_url_re = re.compile(r'^https?://', re.IGNORECASE)

def load_json(location, headers=None):
    """Return parsed JSON document from a URL or local path.

    :param location: An http(s) URL or a filesystem path.
    :param headers: Extra request headers for URL locations.

    Raises LoadError if the document cannot be retrieved or parsed.
    """
    if _url_re.match(location):
        logger.debug('Fetching %s' % location)
        try:
            r = requests.get(location, headers=headers)
            r.raise_for_status()
            return r.json()
        except (requests.RequestException, ValueError) as e:
            raise LoadError('Could not load %s: %s' % (location, e)) from e
    try:
        with open(location, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise LoadError('Could not load %s: %s' % (location, e)) from e

def load_synapse_data(location, headers=None):
    """Return raw Synapse dataset {"schemas": [...], "atlases": [...]}.

    Raises InvalidDataset if the document lacks either list.
    """
    data = load_json(location, headers=headers)
    if not isinstance(data, dict) \
       or not isinstance(data.get('schemas'), list) \
       or not isinstance(data.get('atlases'), list):
        raise InvalidDataset('Synapse dataset %s must provide "schemas" and "atlases" lists' % (location,))
    logger.info('Loaded %d schemas and %d atlases from %s' % (len(data['schemas']), len(data['atlases']), location))
    return data

def load_atlas_metadata(location, headers=None):
    """Return list of external atlas metadata records.

    Accepts either a bare list or a document {"atlases": [...]}.
    """
    doc = load_json(location, headers=headers)
    if isinstance(doc, dict):
        doc = doc.get('atlases')
    if not isinstance(doc, list):
        raise MetadataError('Atlas metadata %s must be a list of records' % (location,))
    logger.info('Loaded %d atlas metadata records from %s' % (len(doc), location))
    return doc
