"""
Greedy clustering of files into duplicate groups.
"""

import logging
from typing import Callable, List, Optional, Sequence

from .models import DuplicateGroup, MediaFile

logger = logging.getLogger(__name__)

def find_duplicates(files: Sequence[MediaFile],
                    are_duplicates: Callable[[MediaFile, MediaFile], bool],
                    strict: bool = False,
                    progress_callback: Optional[Callable] = None) -> List[DuplicateGroup]:
    """Partition ``files`` into groups of duplicates.

    Files are walked in the given order. Each file not yet claimed seeds a
    group, and every later unclaimed file that matches the seed joins it.
    Only the seed is compared against, so membership is not transitive:
    two members may each match the seed without matching each other. With
    ``strict`` a candidate must match every member already in the group.

    Groups with a single member are dropped. ``progress_callback`` is
    called once for every file that is either seeded or claimed.
    """
    duplicate_groups = []
    processed = set()

    for i, seed in enumerate(files):
        if seed.path in processed:
            continue

        current_group = DuplicateGroup()
        current_group.add_file(seed)
        processed.add(seed.path)

        for candidate in files[i + 1:]:
            if candidate.path in processed:
                continue

            logger.debug(f"Comparing {seed.path} with {candidate.path}")
            if not are_duplicates(seed, candidate):
                continue
            if strict and not all(are_duplicates(member, candidate)
                                  for member in current_group.files[1:]):
                logger.debug(f"{candidate.path} matches {seed.path} but not every group member")
                continue

            current_group.add_file(candidate)
            processed.add(candidate.path)
            if progress_callback:
                progress_callback()

        if progress_callback:
            progress_callback()

        if len(current_group.files) > 1:
            duplicate_groups.append(current_group)
            logger.info(f"Found duplicate group: {', '.join(str(p) for p in current_group.paths)}")

    return duplicate_groups
