# playlist_converter/i18n.py
import locale

MESSAGES = {
    "en": {
        "help_playlists": "Playlist files to convert.",
        "help_output_dir": "Path to write output to.",
        "help_workers": "Number of conversions to run in parallel.",
        "help_ffmpeg": "FFmpeg executable to use for conversions.",
        "help_quality": "FFmpeg audio quality (0=best, 9=worst).",
        "help_timeout": "Abort a single conversion after this many seconds.",
        "help_config": "YAML configuration file.",
        "help_strict": "Exit with a non-zero status if any file failed.",
        "help_lang": "Set the language for output messages (e.g., 'en' or 'fr').",
        "help_version": "Show the version and exit.",
        "run_started": "Converting {count} playlist(s) into '{output_dir}'...",
        "run_completed": "Done: {converted} converted, {copied} copied, {failed} failed (of {total}).",
        "run_failures": "{failed} file(s) failed, check the warnings above.",
    },
    "fr": {
        "help_playlists": "Fichiers de playlist à convertir.",
        "help_output_dir": "Dossier de sortie.",
        "help_workers": "Nombre de conversions exécutées en parallèle.",
        "help_ffmpeg": "Exécutable FFmpeg utilisé pour les conversions.",
        "help_quality": "Qualité audio FFmpeg (0=meilleure, 9=pire).",
        "help_timeout": "Interrompt une conversion après ce nombre de secondes.",
        "help_config": "Fichier de configuration YAML.",
        "help_strict": "Termine avec un code non nul si un fichier a échoué.",
        "help_lang": "Définit la langue des messages de sortie (ex: 'en' ou 'fr').",
        "help_version": "Affiche la version et quitte.",
        "run_started": "Conversion de {count} playlist(s) dans '{output_dir}'...",
        "run_completed": "Terminé : {converted} convertis, {copied} copiés, {failed} en échec (sur {total}).",
        "run_failures": "{failed} fichier(s) en échec, consultez les avertissements ci-dessus.",
    }
}

_current_lang = "en"

def get_default_lang():
    try:
        lang_code, _ = locale.getlocale()
        return "fr" if lang_code and lang_code.startswith("fr") else "en"
    except (ValueError, TypeError):
        return "en"

def set_lang(lang: str):
    global _current_lang
    _current_lang = lang if lang in MESSAGES else "en"

def get_message(key, **kwargs):
    lang = _current_lang
    if lang not in MESSAGES or key not in MESSAGES[lang]:
        # Fallback to English if key not found in current language
        lang = "en"

    message_template = MESSAGES[lang].get(key, f"Translation missing for key: {key}")

    try:
        return message_template.format(**kwargs)
    except KeyError as e:
        # This can happen if a placeholder is missing in kwargs
        return f"Formatting error for key '{key}': missing placeholder {e}"

# Initialize with default system language
set_lang(get_default_lang())
