"""JavaScript evaluated inside scraped pages.

These hard-code the current markup of the profile and build sites. When the
markup changes they return null/empty and the scrapers degrade to an empty
answer.
"""

# Profile page: level, solo-queue tier, LP and win/loss.
# The LP and W/L lookups only accept leaf elements with short text, otherwise
# a container whose text concatenates "Gold 1 15 LP" would match first.
RANK_PROFILE_SCRIPT = r"""
() => {
    const levelEl = document.querySelector('span[class*="leading-5"][class*="text-white"]');
    const scrapedLevel = levelEl ? parseInt(levelEl.innerText, 10) || 0 : 0;

    const sections = Array.from(document.querySelectorAll('section'));
    const soloSection = sections.find(s => (s.innerText || '').includes('Ranked Solo/Duo'));
    if (!soloSection) return null;

    const tierEl = soloSection.querySelector('strong');
    if (!tierEl) return null;

    const leaves = Array.from(soloSection.querySelectorAll('div, span'))
        .filter(el => el.children.length === 0);

    const lpEl = leaves.find(el => (el.innerText || '').includes('LP') && el.innerText.length < 10);
    const winLossEl = leaves.find(el => {
        const text = el.innerText || '';
        return /\d+W\s+\d+L/.test(text) && text.length < 40;
    });

    return {
        tierText: tierEl.innerText.trim(),
        lpText: lpEl ? lpEl.innerText : '',
        winLossText: winLossEl ? winLossEl.innerText : '',
        scrapedLevel: scrapedLevel,
    };
}
"""

# Build page is ready when the SSR global is populated or enough icons exist.
BUILD_SIGNAL_SCRIPT = r"""
() => (window.__SSR_DATA__ && Object.keys(window.__SSR_DATA__).length > 0) ||
      document.querySelectorAll('img[src*="item"], img[src*="perk"], img[src*="rune"]').length > 3
"""

SCROLL_STEP_SCRIPT = r"""
(dy) => window.scrollBy(0, dy)
"""

# Selected runes are the icons whose own element or one of the first three
# ancestors carries an "active" class. Stat shards mark selection on their
# own wrapper, so they get a separate pass. Returns icon filenames.
BUILD_RUNES_SCRIPT = r"""
() => {
    const activeClass = /(^|[\s_-])active([\s_-]|$)/i;
    const fileOf = (src) => {
        const clean = (src || '').split('?')[0];
        return clean.substring(clean.lastIndexOf('/') + 1);
    };
    const isActive = (el, depth) => {
        let node = el;
        for (let i = 0; node && i <= depth; i++, node = node.parentElement) {
            const cls = (node.getAttribute && node.getAttribute('class')) || '';
            if (activeClass.test(cls)) return true;
        }
        return false;
    };

    const seen = new Set();
    const runes = [];
    const push = (name) => {
        if (name && !seen.has(name)) {
            seen.add(name);
            runes.push(name);
        }
    };

    document.querySelectorAll('img[src*="perk"], img[src*="rune"], img[src*="Styles"]').forEach(img => {
        if (img.closest('[class*="shard"]')) return;
        if (isActive(img, 3)) push(fileOf(img.getAttribute('src')));
    });

    const shards = [];
    document.querySelectorAll('[class*="shard"] img, img[src*="StatMods"]').forEach(img => {
        if (isActive(img, 1)) shards.push(fileOf(img.getAttribute('src')));
    });

    return { runes: runes, shards: shards };
}
"""

# Item ids from <img> paths and inline background-image urls. Starting
# items, trinkets and potions are dropped by id and by the heading of the
# section they sit under.
BUILD_ITEMS_SCRIPT = r"""
(excluded) => {
    const exclude = new Set(excluded);
    const headings = /^(starting items|starter items|trinkets?|consumables?|potions?)/i;
    const idOf = (url) => {
        const m = /\/(\d{4,})\.(png|webp|jpg)/i.exec(url || '');
        return m ? parseInt(m[1], 10) : null;
    };
    const underExcludedHeading = (el) => {
        let node = el;
        for (let i = 0; node && i < 5; i++, node = node.parentElement) {
            const firstLine = ((node.innerText || '').trim().split('\n')[0] || '').trim();
            if (headings.test(firstLine)) return true;
        }
        return false;
    };

    const seen = new Set();
    const items = [];
    const consider = (el, url) => {
        const id = idOf(url);
        if (id === null || seen.has(id) || exclude.has(id)) return;
        if (underExcludedHeading(el)) return;
        seen.add(id);
        items.push(id);
    };

    document.querySelectorAll('img[src*="/item/"]').forEach(img => consider(img, img.getAttribute('src')));
    document.querySelectorAll('[style*="background-image"]').forEach(el => {
        const bg = el.style.backgroundImage || '';
        if (bg.includes('item')) consider(el, bg);
    });
    return items;
}
"""
