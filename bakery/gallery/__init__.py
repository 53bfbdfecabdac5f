"""
Cake photo gallery.

Responsibilities:
- Know which numbered photos exist on the site.
- Sort them into the birthday, special-design and cookies buckets.
"""
