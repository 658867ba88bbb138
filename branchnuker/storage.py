# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Result file for a cleanup run."""

import json
from pathlib import Path
from typing import Sequence, Union

from branchnuker.classes import Candidate
from branchnuker.utils.logging import log


def write_candidates(candidates: Sequence[Candidate], path: Union[str, Path]) -> Path:
    """Write the candidate list as a JSON array and return the path written."""
    target = Path(path)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)

    with open(target, 'w', encoding='utf-8') as f:
        json.dump([candidate.to_dict() for candidate in candidates], f, indent=2, ensure_ascii=False)
        f.write('\n')

    log.info(f'Saved {len(candidates)} candidates to {target}')
    return target
