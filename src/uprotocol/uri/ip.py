""" Conversion between IP address literals and their packed byte form. """

import ipaddress


def pack(text):
    """ Return the packed bytes for the IPv4 or IPv6 literal *text*, or None
        if *text* is not a valid address.
    """

    if not text:
        return None

    try:
        address = ipaddress.ip_address(text.strip())
    except ValueError:
        return None

    return address.packed



def unpack(packed):
    """ Return the textual form of a 4- or 16-byte packed address, or None
        if *packed* is some other length.
    """

    if not packed:
        return None

    try:
        address = ipaddress.ip_address(bytes(packed))
    except ValueError:
        return None

    return str(address)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
