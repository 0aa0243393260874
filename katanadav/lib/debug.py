from lxml import etree


def xmlstring(root) -> str:
    if isinstance(root, str):
        return root
    if isinstance(root, bytes):
        return root.decode("utf-8", errors="replace")
    if hasattr(root, "xmlelement"):
        root = root.xmlelement()
    return etree.tostring(root, pretty_print=True).decode("utf-8")
